"""Comment request schemas."""

from books_service.models.schemas.common import CamelModel, CommentBody, WireId


class CreateCommentRequest(CamelModel):
    """Request to comment on a book or chapter."""
    user_id: WireId
    comment: CommentBody
