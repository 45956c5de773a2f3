from .review_service import ReviewService, review_service

__all__ = ["ReviewService", "review_service"]
