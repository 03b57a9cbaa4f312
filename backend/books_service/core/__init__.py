"""Domain services for books, chapters, comments and genres."""
