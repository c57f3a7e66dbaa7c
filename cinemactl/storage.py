"""Plain-text persistence of halls, movies and users."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

from .hall import Hall
from .movies import ActionMovie, DocumentaryMovie, DramaMovie, Movie
from .users import Admin, Customer, Ticket, User

HALLS_FILE = "halls.txt"
MOVIES_FILE = "movies.txt"
USERS_FILE = "users.txt"


@dataclass
class CinemaState:
    """Everything the cinema keeps between runs, plus the next free ids."""

    halls: list[Hall] = field(default_factory=list)
    movies: list[Movie] = field(default_factory=list)
    users: list[User] = field(default_factory=list)
    next_hall_id: int = 1
    next_movie_id: int = 1
    next_user_id: int = 1
    next_ticket_id: int = 1


def format_number(value: float) -> str:
    """Format a number the way the data files store it (six significant digits)."""
    return f"{value:g}"


class _EndOfData(Exception):
    """Raised when the token stream runs out or holds a malformed value."""


class _Tokens:
    """Whitespace-separated tokens read one value at a time."""

    def __init__(self, text: str) -> None:
        self._tokens = iter(text.split())

    def word(self) -> str:
        try:
            return next(self._tokens)
        except StopIteration:
            raise _EndOfData from None

    def integer(self) -> int:
        token = self.word()
        try:
            return int(token)
        except ValueError:
            raise _EndOfData from None

    def number(self) -> float:
        token = self.word()
        try:
            return float(token)
        except ValueError:
            raise _EndOfData from None

    def flag(self) -> bool:
        value = self.integer()
        if value not in (0, 1):
            raise _EndOfData
        return bool(value)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return ""


def _read_halls(tokens: _Tokens) -> Iterator[Hall]:
    try:
        while True:
            hall_id = tokens.integer()
            tokens.integer()  # stored open flag; a loaded hall starts open
            rows = tokens.integer()
            cols = tokens.integer()
            hall = Hall(hall_id, rows, cols)
            for row in range(rows):
                for col in range(cols):
                    if not tokens.flag():
                        hall.reserve_seat(row, col)
            yield hall
    except _EndOfData:
        return


def _read_movies(tokens: _Tokens) -> Iterator[Movie]:
    try:
        while True:
            movie_id = tokens.integer()
            genre = tokens.word()
            common = dict(
                id=movie_id,
                title=tokens.word(),
                rating=tokens.number(),
                duration=tokens.integer(),
                year=tokens.integer(),
                hall_id=tokens.integer(),
                date=tokens.word(),
                start_hour=tokens.integer(),
                start_min=tokens.integer(),
                end_hour=tokens.integer(),
                end_min=tokens.integer(),
            )
            if genre == ActionMovie.genre:
                yield ActionMovie(**common, action_intensity=tokens.integer())
            elif genre == DramaMovie.genre:
                yield DramaMovie(**common, has_comedy_elements=tokens.integer() != 0)
            elif genre == DocumentaryMovie.genre:
                theme = tokens.word()
                yield DocumentaryMovie(
                    **common, theme=theme, based_on_true=tokens.integer() != 0
                )
    except _EndOfData:
        return


def _read_customer_records(tokens: _Tokens, customer: Customer) -> None:
    tokens.word()  # "Tickets:"
    for _ in range(tokens.integer()):
        ticket_id = tokens.integer()
        movie_id = tokens.integer()
        row = tokens.integer()
        col = tokens.integer()
        price = tokens.number()
        customer.add_ticket(Ticket(ticket_id, movie_id, row, col, price))
    tokens.word()  # "History:"
    for _ in range(tokens.integer()):
        customer.add_to_history(tokens.integer())


def _read_users(tokens: _Tokens) -> Iterator[User]:
    try:
        while True:
            user_id = tokens.integer()
            name = tokens.word()
            balance = tokens.number()
            kind = tokens.word()
            password = tokens.word()
            if kind == "admin":
                yield Admin(user_id, name, password, balance)
            else:
                customer = Customer(user_id, name, password, balance)
                _read_customer_records(tokens, customer)
                yield customer
    except _EndOfData:
        return


def _next_id(ids: Iterable[int]) -> int:
    return max([1, *(value + 1 for value in ids)])


def load_state(directory: str | PathLike[str]) -> CinemaState:
    """Read halls, movies and users from a data directory; missing files count as empty."""
    base = Path(directory)
    halls = list(_read_halls(_Tokens(_read_text(base / HALLS_FILE))))
    movies = list(_read_movies(_Tokens(_read_text(base / MOVIES_FILE))))
    users = list(_read_users(_Tokens(_read_text(base / USERS_FILE))))
    tickets = [
        ticket
        for user in users
        if isinstance(user, Customer)
        for ticket in user.upcoming_tickets
    ]
    return CinemaState(
        halls=halls,
        movies=movies,
        users=users,
        next_hall_id=_next_id(hall.id for hall in halls),
        next_movie_id=_next_id(movie.id for movie in movies),
        next_user_id=_next_id(user.id for user in users),
        next_ticket_id=_next_id(ticket.id for ticket in tickets),
    )


def _format_halls(halls: Iterable[Hall]) -> str:
    parts = []
    for hall in halls:
        parts.append(f"{hall.id} {int(hall.is_open)} {hall.rows} {hall.cols}\n")
        for row in range(hall.rows):
            seats = "".join(
                f"{int(hall.is_seat_free(row, col))} " for col in range(hall.cols)
            )
            parts.append(seats + "\n")
    return "".join(parts)


def _format_movie(movie: Movie) -> str:
    line = (
        f"{movie.id} {movie.genre} {movie.title} {format_number(movie.rating)} "
        f"{movie.duration} {movie.year} {movie.hall_id} {movie.date} "
        f"{movie.start_hour} {movie.start_min} {movie.end_hour} {movie.end_min} "
    )
    if isinstance(movie, ActionMovie):
        line += str(movie.action_intensity)
    elif isinstance(movie, DramaMovie):
        line += str(int(movie.has_comedy_elements))
    elif isinstance(movie, DocumentaryMovie):
        line += f"{movie.theme} {int(movie.based_on_true)}"
    return line + "\n"


def _format_user(user: User) -> str:
    kind = "admin" if user.is_admin() else "customer"
    text = (
        f"{user.id} {user.name} {format_number(user.balance)} {kind} {user.password}\n"
    )
    if not user.is_admin() and isinstance(user, Customer):
        text += f"Tickets: {len(user.upcoming_tickets)}\n"
        text += "".join(
            f"{t.id} {t.movie_id} {t.row} {t.col} {format_number(t.price)}\n"
            for t in user.upcoming_tickets
        )
        text += f"History: {len(user.watch_history)}\n"
        text += "".join(f"{movie_id} " for movie_id in user.watch_history) + "\n"
    return text


def save_state(directory: str | PathLike[str], state: CinemaState) -> None:
    """Write halls, movies and users into a data directory, creating it if needed."""
    base = Path(directory)
    base.mkdir(parents=True, exist_ok=True)
    (base / HALLS_FILE).write_text(_format_halls(state.halls), encoding="utf-8")
    (base / MOVIES_FILE).write_text(
        "".join(_format_movie(movie) for movie in state.movies), encoding="utf-8"
    )
    (base / USERS_FILE).write_text(
        "".join(_format_user(user) for user in state.users), encoding="utf-8"
    )