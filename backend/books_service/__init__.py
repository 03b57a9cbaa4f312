"""Books microservice: books, chapters, comments and genres over HTTP."""
