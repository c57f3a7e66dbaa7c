"""The cinema: halls, showings, accounts and ticket sales."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date as Date
from datetime import datetime
from os import PathLike
from pathlib import Path
from types import TracebackType

from . import storage
from .hall import Hall
from .movies import CLOSED_HALL, ActionMovie, DocumentaryMovie, DramaMovie, Movie
from .users import Admin, Customer, Ticket, User

ADMIN_NAME = "admin"

BASE_PRICE_ACTION = 9.0
BASE_PRICE_DRAMA = 7.0
BASE_PRICE_DOCUMENTARY = 5.0

NO_SUCH_CUSTOMER = "No such customer\n"


def _minutes(hour: int, minute: int) -> int:
    return hour * 60 + minute


def _overlaps(start1: int, end1: int, start2: int, end2: int) -> bool:
    return start1 < end2 and start2 < end1


class Cinema:
    """Holds the cinema's halls, movies and users and applies its rules.

    A fresh cinema always contains a built-in administrator whose name and
    password are both ``admin``. Used as a context manager, the state is
    saved on exit.
    """

    def __init__(self, data_dir: str | PathLike[str] = "data") -> None:
        self.data_dir = Path(data_dir)
        self._halls: list[Hall] = []
        self._movies: list[Movie] = []
        self._users: list[User] = []
        self._next_hall_id = 1
        self._next_movie_id = 1
        self._next_user_id = 1
        self._next_ticket_id = 1
        self._users.append(Admin(self._allocate_user_id(), ADMIN_NAME, ADMIN_NAME))

    def __enter__(self) -> Cinema:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.save_state()

    # ----- id allocation -----

    def _allocate_user_id(self) -> int:
        user_id = self._next_user_id
        self._next_user_id += 1
        return user_id

    def _allocate_movie_id(self) -> int:
        movie_id = self._next_movie_id
        self._next_movie_id += 1
        return movie_id

    def _allocate_ticket_id(self) -> int:
        ticket_id = self._next_ticket_id
        self._next_ticket_id += 1
        return ticket_id

    # ----- read-only views -----

    @property
    def halls(self) -> tuple[Hall, ...]:
        return tuple(self._halls)

    @property
    def movies(self) -> tuple[Movie, ...]:
        return tuple(self._movies)

    @property
    def users(self) -> tuple[User, ...]:
        return tuple(self._users)

    def _customers(self) -> Iterator[Customer]:
        return (user for user in self._users if isinstance(user, Customer))

    # ----- persistence -----

    def load_state(self) -> None:
        """Append the halls, movies and users stored in the data directory."""
        state = storage.load_state(self.data_dir)
        self._halls.extend(state.halls)
        self._movies.extend(state.movies)
        self._users.extend(state.users)
        self._next_hall_id = max(self._next_hall_id, state.next_hall_id)
        self._next_movie_id = max(self._next_movie_id, state.next_movie_id)
        self._next_user_id = max(self._next_user_id, state.next_user_id)
        self._next_ticket_id = max(self._next_ticket_id, state.next_ticket_id)

    def save_state(self) -> None:
        """Write the current halls, movies and users to the data directory."""
        storage.save_state(
            self.data_dir,
            storage.CinemaState(
                halls=list(self._halls),
                movies=list(self._movies),
                users=list(self._users),
                next_hall_id=self._next_hall_id,
                next_movie_id=self._next_movie_id,
                next_user_id=self._next_user_id,
                next_ticket_id=self._next_ticket_id,
            ),
        )

    # ----- lookups -----

    def find_hall(self, hall_id: int) -> Hall | None:
        return next((hall for hall in self._halls if hall.id == hall_id), None)

    def find_movie(self, movie_id: int) -> Movie | None:
        return next((movie for movie in self._movies if movie.id == movie_id), None)

    def find_user_by_name(self, name: str) -> User | None:
        return next((user for user in self._users if user.name == name), None)

    def find_user_by_id(self, user_id: int) -> User | None:
        return next((user for user in self._users if user.id == user_id), None)

    # ----- accounts -----

    def login(self, name: str, password: str) -> User | None:
        """Return the user with these credentials, or None."""
        user = self.find_user_by_name(name)
        if user is not None and user.authenticate(password):
            return user
        return None

    def register_customer(self, name: str, password: str) -> bool:
        """Create a customer; False if the name is already taken."""
        if self.find_user_by_name(name) is not None:
            return False
        self._users.append(Customer(self._allocate_user_id(), name, password))
        return True

    def remove_user(self, user_id: int) -> bool:
        """Delete a customer and free the seats they held; admins cannot be removed."""
        user = self.find_user_by_id(user_id)
        if user is None or user.is_admin():
            return False
        if isinstance(user, Customer):
            for ticket in user.upcoming_tickets:
                movie = self.find_movie(ticket.movie_id)
                if movie is None:
                    continue
                hall = self.find_hall(movie.hall_id)
                if hall is not None:
                    hall.free_seat(ticket.row, ticket.col)
        self._users.remove(user)
        return True

    # ----- halls -----

    def open_hall(self, rows: int, cols: int) -> int:
        """Add a hall and return its id."""
        hall_id = self._next_hall_id
        self._halls.append(Hall(hall_id, rows, cols))
        self._next_hall_id += 1
        return hall_id

    def _refund(self, customer: Customer, ticket: Ticket, hall: Hall | None) -> None:
        customer.deposit(ticket.price)
        if hall is not None:
            hall.free_seat(ticket.row, ticket.col)
        customer.remove_ticket(ticket.id)

    def _refund_movie(self, movie_id: int, hall: Hall | None) -> None:
        for customer in self._customers():
            for ticket in list(customer.upcoming_tickets):
                if ticket.movie_id == movie_id:
                    self._refund(customer, ticket, hall)

    def close_hall(self, hall_id: int) -> bool:
        """Remove a hall, refunding tickets of its showings and marking them hall-less."""
        hall = self.find_hall(hall_id)
        if hall is None:
            return False
        for movie in self._movies:
            if movie.hall_id == hall_id:
                self._refund_movie(movie.id, hall)
                movie.hall_id = CLOSED_HALL
        self._halls.remove(hall)
        return True

    # ----- movies -----

    def _add_movie(self, factory: type[Movie], hall_id: int, **fields: object) -> Movie | None:
        if self.find_hall(hall_id) is None:
            return None
        movie = factory(id=self._allocate_movie_id(), hall_id=hall_id, **fields)
        self._movies.append(movie)
        return movie

    def add_action_movie(
        self,
        title: str,
        rating: float,
        duration: int,
        year: int,
        hall_id: int,
        date: str,
        start_hour: int,
        start_min: int,
        end_hour: int,
        end_min: int,
        action_intensity: int,
    ) -> Movie | None:
        """Schedule an action movie; None if the hall does not exist."""
        return self._add_movie(
            ActionMovie, hall_id, title=title, rating=rating, duration=duration,
            year=year, date=date, start_hour=start_hour, start_min=start_min,
            end_hour=end_hour, end_min=end_min, action_intensity=action_intensity,
        )

    def add_drama_movie(
        self,
        title: str,
        rating: float,
        duration: int,
        year: int,
        hall_id: int,
        date: str,
        start_hour: int,
        start_min: int,
        end_hour: int,
        end_min: int,
        has_comedy: bool,
    ) -> Movie | None:
        """Schedule a drama; None if the hall does not exist."""
        return self._add_movie(
            DramaMovie, hall_id, title=title, rating=rating, duration=duration,
            year=year, date=date, start_hour=start_hour, start_min=start_min,
            end_hour=end_hour, end_min=end_min, has_comedy_elements=has_comedy,
        )

    def add_documentary_movie(
        self,
        title: str,
        rating: float,
        duration: int,
        year: int,
        hall_id: int,
        date: str,
        start_hour: int,
        start_min: int,
        end_hour: int,
        end_min: int,
        theme: str,
        based_on_true: bool,
    ) -> Movie | None:
        """Schedule a documentary; None if the hall does not exist."""
        return self._add_movie(
            DocumentaryMovie, hall_id, title=title, rating=rating, duration=duration,
            year=year, date=date, start_hour=start_hour, start_min=start_min,
            end_hour=end_hour, end_min=end_min, theme=theme,
            based_on_true=based_on_true,
        )

    def remove_movie(self, movie_id: int) -> bool:
        """Delete a movie, refunding its tickets and dropping it from histories."""
        movie = self.find_movie(movie_id)
        if movie is None:
            return False
        self._refund_movie(movie_id, self.find_hall(movie.hall_id))
        for customer in self._customers():
            customer.remove_from_history(movie_id)
        self._movies.remove(movie)
        return True

    def update_movie_title(self, movie_id: int, new_title: str) -> bool:
        movie = self.find_movie(movie_id)
        if movie is None:
            return False
        movie.title = new_title
        return True

    def update_movie_hall(self, movie_id: int, new_hall_id: int) -> bool:
        """Move a showing to another hall unless it would overlap a showing there."""
        if new_hall_id == CLOSED_HALL or self.find_hall(new_hall_id) is None:
            return False
        movie = self.find_movie(movie_id)
        if movie is None:
            return False
        start = _minutes(movie.start_hour, movie.start_min)
        end = _minutes(movie.end_hour, movie.end_min)
        for other in self._movies:
            if other is movie or other.hall_id != new_hall_id or other.date != movie.date:
                continue
            if _overlaps(
                start, end,
                _minutes(other.start_hour, other.start_min),
                _minutes(other.end_hour, other.end_min),
            ):
                return False
        movie.hall_id = new_hall_id
        return True

    def is_time_slot_free(
        self,
        hall_id: int,
        date: str,
        start_hour: int,
        start_min: int,
        end_hour: int,
        end_min: int,
    ) -> bool:
        """Whether [start, end) clashes with no showing in the hall on that date."""
        start = _minutes(start_hour, start_min)
        end = _minutes(end_hour, end_min)
        return not any(
            _overlaps(
                start, end,
                _minutes(movie.start_hour, movie.start_min),
                _minutes(movie.end_hour, movie.end_min),
            )
            for movie in self._movies
            if movie.hall_id == hall_id and movie.date == date
        )

    # ----- ticketing -----

    @staticmethod
    def _base_price(movie: Movie) -> float:
        if movie.genre == ActionMovie.genre:
            return BASE_PRICE_ACTION
        if movie.genre == DramaMovie.genre:
            return BASE_PRICE_DRAMA
        return BASE_PRICE_DOCUMENTARY

    def buy_ticket(
        self,
        customer: Customer,
        movie_id: int,
        row: int,
        col: int,
        now: datetime | None = None,
    ) -> bool:
        """Sell a seat for an upcoming showing and charge the customer."""
        movie = self.find_movie(movie_id)
        if movie is None:
            return False
        now = now or datetime.now()
        showing = (
            int(movie.date[0:4]),
            int(movie.date[5:7]),
            int(movie.date[8:10]),
            movie.start_hour,
            movie.start_min,
        )
        current = (now.year, now.month, now.day, now.hour, now.minute)
        if showing <= current:
            return False
        if movie.hall_id == CLOSED_HALL:
            return False
        hall = self.find_hall(movie.hall_id)
        if hall is None or not hall.reserve_seat(row, col):
            return False
        price = movie.calculate_price(self._base_price(movie))
        if not customer.charge(price):
            return False
        customer.add_ticket(Ticket(self._allocate_ticket_id(), movie_id, row, col, price))
        return True

    def has_tickets(self, movie_id: int) -> bool:
        return any(
            ticket.movie_id == movie_id
            for customer in self._customers()
            for ticket in customer.upcoming_tickets
        )

    def rate_movie(self, customer: Customer, movie_id: int, rating: int) -> bool:
        """Accept a rating only for a movie in the customer's watch history.

        The movie's stored rating is left unchanged.
        """
        return movie_id in customer.watch_history

    def expire_past_tickets(self, customer: Customer, today: Date | None = None) -> None:
        """Move tickets for showings dated before today into the watch history."""
        today_text = (today or Date.today()).isoformat()
        for ticket in list(customer.upcoming_tickets):
            movie = self.find_movie(ticket.movie_id)
            if movie is None:
                continue
            if movie.date < today_text:
                customer.remove_ticket(ticket.id)
                customer.add_to_history(movie.id)

    # ----- listings -----

    def list_halls(self) -> str:
        return "".join(hall.layout() for hall in self._halls)

    def list_movies(self) -> str:
        return "".join(movie.describe() for movie in self._movies)

    def list_users(self) -> str:
        return "".join(
            f"[{user.id}] {user.name}{' (admin)' if user.is_admin() else ''}\n"
            for user in self._users
        )

    def list_tickets(self, customer: Customer) -> str:
        return "".join(f"{ticket.describe()}\n" for ticket in customer.upcoming_tickets)

    def list_history(self, customer: Customer) -> str:
        parts = []
        for movie_id in customer.watch_history:
            movie = self.find_movie(movie_id)
            if movie is not None:
                parts.append(movie.describe())
            else:
                parts.append(f"[Movie {movie_id}] (no longer in catalog)\n")
        return "".join(parts)

    def list_user_history(self, user_id: int) -> str:
        user = self.find_user_by_id(user_id)
        if isinstance(user, Customer):
            return self.list_history(user)
        return NO_SUCH_CUSTOMER

    def list_user_tickets(self, user_id: int) -> str:
        user = self.find_user_by_id(user_id)
        if isinstance(user, Customer):
            return self.list_tickets(user)
        return NO_SUCH_CUSTOMER