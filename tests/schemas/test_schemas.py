"""Tests for request schema validation."""
import pytest
from pydantic import ValidationError

from schemas.movie import MovieCreate, MovieUpdate
from schemas.token import LoginRequest
from schemas.user import UserCreate


class TestMovieRating:
    """Tests for rating validation on create and update."""

    @pytest.mark.parametrize("rating", [True, False])
    def test__movie_create__rejects_boolean_rating(self, rating: bool) -> None:
        with pytest.raises(ValidationError):
            MovieCreate(title="a", genre="b", rating=rating, streamingLink="c")

    @pytest.mark.parametrize("rating", [True, False])
    def test__movie_update__rejects_boolean_rating(self, rating: bool) -> None:
        with pytest.raises(ValidationError):
            MovieUpdate(rating=rating)

    @pytest.mark.parametrize(("rating", "expected"), [(8, 8.0), (7.5, 7.5), ("9", 9.0)])
    def test__movie_create__accepts_numeric_rating(self, rating: object, expected: float) -> None:
        movie = MovieCreate(title="a", genre="b", rating=rating, streamingLink="c")

        assert movie.rating == expected


class TestEmailNormalization:
    """Signup and login trim the email the same way."""

    def test__login_request__strips_email(self) -> None:
        assert LoginRequest(email="  bob@example.com ", password="pw").email == "bob@example.com"

    def test__user_create__strips_email(self) -> None:
        data = UserCreate(name="Bob", email=" bob@example.com ", password="pw", isAdmin=False)

        assert data.email == "bob@example.com"
