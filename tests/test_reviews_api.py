# =============================================================================
# tests/test_reviews_api.py - Review Endpoint Tests
# =============================================================================
# /api/restaurants/{restaurant_id}/reviews with ReviewService mocked.
# =============================================================================

from app.exceptions import NotFoundError
from tests.conftest import MISSING_ID, RESTAURANT_ID

REVIEWS_URL = f"/api/restaurants/{RESTAURANT_ID}/reviews"


class TestListReviews:

    def test_lists_reviews(self, client, mock_review_service):
        mock_review_service.list_reviews.return_value = [
            {"id": "r1", "review": "Great pasta", "rating": 5, "restaurant": RESTAURANT_ID, "user": "u1"},
        ]

        response = client.get(REVIEWS_URL)

        assert response.status_code == 200
        assert response.json()["count"] == 1
        mock_review_service.list_reviews.assert_awaited_once_with(RESTAURANT_ID)

    def test_missing_restaurant(self, client, mock_review_service):
        mock_review_service.list_reviews.side_effect = NotFoundError("restaurant", MISSING_ID)

        response = client.get(f"/api/restaurants/{MISSING_ID}/reviews")

        assert response.status_code == 404


class TestCreateReview:

    def test_user_creates_review(self, client, mock_review_service, auth_header):
        mock_review_service.create_review.return_value = {
            "id": "r2", "review": "Lovely views", "rating": 4, "restaurant": RESTAURANT_ID, "user": "user-user",
        }

        response = client.post(
            REVIEWS_URL,
            json={"review": "Lovely views", "rating": 4},
            headers=auth_header("user"),
        )

        assert response.status_code == 201
        assert response.json()["data"]["rating"] == 4

        restaurant_id, user_id, payload = mock_review_service.create_review.call_args.args
        assert restaurant_id == RESTAURANT_ID
        assert user_id == "user-user"
        assert payload.rating == 4

    def test_staff_cannot_review(self, client, mock_review_service, auth_header):
        response = client.post(
            REVIEWS_URL,
            json={"review": "Our own place is great", "rating": 5},
            headers=auth_header("staff"),
        )

        assert response.status_code == 403
        mock_review_service.create_review.assert_not_called()

    def test_rating_out_of_range(self, client, mock_review_service, auth_header):
        response = client.post(
            REVIEWS_URL,
            json={"review": "Off the charts", "rating": 6},
            headers=auth_header("user"),
        )

        assert response.status_code == 400
        mock_review_service.create_review.assert_not_called()
