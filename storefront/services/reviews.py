"""Product reviews: customer submission, admin moderation, testimonials."""
from datetime import date
from typing import Dict, List, Optional

from ..app.state import AppState, next_id
from ..data.fixtures import average_approved_rating
from ..data.models import Review, ReviewStatus
from ..utils.errors import InvalidArgumentError, NotFoundError
from ..utils.logger import get_logger

logger = get_logger()


def _refresh_product(state: AppState, product_id: int) -> None:
    """Recompute a product's rating and review list from the review store."""
    product = state.get_product(product_id)
    updated = product.model_copy(update={
        "rating": average_approved_rating(state.reviews, product_id),
        "reviews": [r for r in state.reviews if r.product_id == product_id],
    })
    state.replace_product(updated)


def submit_review(state: AppState, product_id: int, author: str, rating: int, comment: str,
                  today: Optional[date] = None) -> Review:
    state.get_product(product_id)
    if not (author or "").strip() or not (comment or "").strip():
        raise InvalidArgumentError("Please provide your name and a comment.")
    if not 1 <= rating <= 5:
        raise InvalidArgumentError("Rating must be between 1 and 5.")
    review = Review(
        id=next_id(state.reviews),
        product_id=product_id,
        author=author.strip(),
        rating=rating,
        comment=comment.strip(),
        date=(today or date.today()).isoformat(),
        status=ReviewStatus.pending,
    )
    state.reviews.append(review)
    # Pending reviews don't move the rating but do show on the product's list
    _refresh_product(state, product_id)
    logger.info(f"[REVIEWS] review {review.id} submitted for product {product_id}")
    return review


def _review_status(status) -> ReviewStatus:
    try:
        return ReviewStatus(status)
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid review status: {status!r}") from e


def moderate_review(state: AppState, review_id: int, status: ReviewStatus) -> Review:
    for i, r in enumerate(state.reviews):
        if r.id == review_id:
            # Product must still exist before the status change is stored
            state.get_product(r.product_id)
            updated = r.model_copy(update={"status": _review_status(status)})
            state.reviews[i] = updated
            _refresh_product(state, r.product_id)
            logger.info(f"[REVIEWS] review {review_id} -> {updated.status.value}")
            return updated
    raise NotFoundError(f"Review {review_id} not found")


def reviews_by_author(state: AppState, author: str) -> List[Review]:
    return [r for r in state.reviews if r.author == author]


def testimonials(state: AppState) -> List[Dict]:
    """Approved reviews with the reviewed product's name."""
    names = {p.id: p.name for p in state.products}
    return [
        {**r.model_dump(), "product_name": names[r.product_id]}
        for r in state.reviews
        if r.status == ReviewStatus.approved and r.product_id in names
    ]
