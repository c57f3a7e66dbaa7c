"""Movie showings and their genre-specific pricing."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar

CLOSED_HALL = -1


def _two_digits(value: int) -> str:
    return f"0{value}" if value < 10 else str(value)


@dataclass(eq=False)
class Movie(ABC):
    """A scheduled showing of a film in a hall."""

    genre: ClassVar[str] = ""

    id: int
    title: str
    rating: float
    duration: int
    year: int
    hall_id: int
    date: str
    start_hour: int
    start_min: int
    end_hour: int
    end_min: int
    _rating_sum: float = field(init=False, repr=False)
    _rating_count: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._rating_sum = float(self.rating)
        self._rating_count = 1

    @property
    def start_time(self) -> tuple[int, int]:
        return self.start_hour, self.start_min

    @property
    def end_time(self) -> tuple[int, int]:
        return self.end_hour, self.end_min

    @abstractmethod
    def calculate_price(self, base_price: float) -> float:
        """Return the ticket price for this showing given the genre's base price."""

    def add_rating(self, rating: int) -> None:
        """Fold a new rating into the running average."""
        self._rating_sum += rating
        self._rating_count += 1
        self.rating = self._rating_sum / self._rating_count

    def describe(self) -> str:
        """Return a multi-line human-readable description."""
        hall = "closed" if self.hall_id == CLOSED_HALL else str(self.hall_id)
        return (
            f"[{self.id}] {self.title} ({self.year}), "
            f"rating: {self.rating:g}, {self.duration}min, genre: {self.genre}\n"
            f"  hall: {hall}  date/time: {self.date} "
            f"{_two_digits(self.start_hour)}:{_two_digits(self.start_min)}-"
            f"{_two_digits(self.end_hour)}:{_two_digits(self.end_min)}\n"
        )

    def __str__(self) -> str:
        return self.describe()


@dataclass(eq=False)
class ActionMovie(Movie):
    """An action film; the price rises with its intensity (0..20)."""

    genre: ClassVar[str] = "Action"

    action_intensity: int

    def __post_init__(self) -> None:
        super().__post_init__()
        if not 0 <= self.action_intensity <= 20:
            raise ValueError("action_intensity must be in [0..20]")

    def calculate_price(self, base_price: float) -> float:
        return base_price + self.action_intensity * 1.5

    def describe(self) -> str:
        return super().describe() + f"   >> action intensity: {self.action_intensity}\n"


@dataclass(eq=False)
class DramaMovie(Movie):
    """A drama; comedy elements add a surcharge."""

    genre: ClassVar[str] = "Drama"

    has_comedy_elements: bool

    def calculate_price(self, base_price: float) -> float:
        return base_price + (2.0 if self.has_comedy_elements else 0.0)

    def describe(self) -> str:
        comedy = "yes" if self.has_comedy_elements else "no"
        return super().describe() + f"   >> comedy elements: {comedy}\n"


@dataclass(eq=False)
class DocumentaryMovie(Movie):
    """A documentary; those based on real events cost more."""

    genre: ClassVar[str] = "Documentary"

    theme: str
    based_on_true: bool

    def calculate_price(self, base_price: float) -> float:
        return base_price + (3.0 if self.based_on_true else 0.0)

    def describe(self) -> str:
        based = "yes" if self.based_on_true else "no"
        return (
            super().describe()
            + f"   >> theme: {self.theme}\n"
            + f"   >> based on real events: {based}\n"
        )