"""
Feedback Endpoints.

Leave a note and comment on a book, and list the feedback of a book.
"""

from fastapi import APIRouter, Query

from book_network.core.models.io import FeedbackRequest, FeedbackResponse, IdResponse, PageResponse
from book_network.server.services.deps import CurrentUserDep, FeedbackServiceDep

router = APIRouter()


@router.post(
    "",
    response_model=IdResponse,
    summary="Leave Feedback",
    description="Rate a book you do not own.",
    responses={403: {"description": "Own, archived or not shareable book"}, 404: {"description": "Book not found"}},
)
async def save_feedback(request: FeedbackRequest, user: CurrentUserDep, feedbacks: FeedbackServiceDep) -> IdResponse:
    return IdResponse(id=await feedbacks.save(request.book_id, request.note, request.comment, user))


@router.get(
    "/book/{book_id}",
    response_model=PageResponse[FeedbackResponse],
    summary="List Book Feedback",
    description="Feedback left on a book, newest first. `own_feedback` marks the caller's entries.",
)
async def find_all_feedbacks_by_book(
    book_id: int,
    user: CurrentUserDep,
    feedbacks: FeedbackServiceDep,
    page: int = Query(default=0, ge=0),
    size: int = Query(default=10, ge=1, le=100),
) -> PageResponse[FeedbackResponse]:
    return await feedbacks.find_all_feedbacks_by_book(book_id, page, size, user)
