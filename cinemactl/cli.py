"""Interactive command-line front end for the cinema."""

from __future__ import annotations

import argparse
import re
import sys
from collections.abc import Callable, Iterable
from typing import TextIO

from .cinema import Cinema
from .movies import Movie
from .users import Customer, User

PROMPT = "-> "

HELP_TEXT = (
    "register <user> <pwd>\n"
    "login <user> <pwd>\n"
    "logout\n"
    "exit\n"
    "help\n"
    "list-movies\n"
    "list-tickets\n"
    "list-history\n"
    "list-users\n"
    "buy-ticket <movieId> <row> <col>\n"
    "rate-movie <movieId> <rating>\n"
    "Admin-only:\n"
    "  open-hall <rows> <cols>\n"
    "  close-hall <hallId>\n"
    "  add-movie <genre> <title> <rating> <duration> <year> <hallId> <date> <sh> <sm> <eh> <em> [extra]\n"
    "  remove-movie <movieId>\n"
    "  update-movie-title <movieId> <new title>\n"
    "  update-movie-hall <movieId> <new hallId>\n"
    "  remove-user <userId>\n"
)

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


def _to_int(text: str) -> int:
    """Parse the leading integer of a token; ValueError if there is none."""
    match = _INT_PREFIX.match(text)
    if match is None:
        raise ValueError(f"invalid integer: {text!r}")
    return int(match.group(1))


def _to_float(text: str) -> float:
    """Parse the leading number of a token; ValueError if there is none."""
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        raise ValueError(f"invalid number: {text!r}")
    return float(match.group(1))


def _is_true(text: str) -> bool:
    return text in ("1", "true")


def box(title: str, content: str) -> str:
    """Frame a title and its content lines in an ASCII box."""
    lines = content.split("\n")
    if content.endswith("\n"):
        lines.pop()
    width = max([len(title), *(len(line) for line in lines)]) + 2
    border = "+" + "-" * width + "+\n"
    pad_left = (width - len(title)) // 2
    pad_right = width - len(title) - pad_left
    parts = [
        border,
        "|" + " " * pad_left + title + " " * pad_right + "|\n",
        border,
    ]
    parts.extend("|" + line + " " * (width - len(line)) + "|\n" for line in lines)
    parts.append(border)
    return "".join(parts)


def valid_date(date: str) -> bool:
    """Whether the text is a YYYY-MM-DD date with a plausible month and day."""
    if len(date) != 10 or date[4] != "-" or date[7] != "-":
        return False
    digits = date[0:4] + date[5:7] + date[8:10]
    if not all("0" <= ch <= "9" for ch in digits):
        return False
    month = int(date[5:7])
    day = int(date[8:10])
    return 1 <= month <= 12 and 1 <= day <= 31


def valid_time(hour: int, minute: int) -> bool:
    return 0 <= hour < 24 and 0 <= minute < 60


def start_before_end(start_hour: int, start_min: int, end_hour: int, end_min: int) -> bool:
    return start_hour * 60 + start_min < end_hour * 60 + end_min


class _Tokens:
    """Space-separated tokens taken from a command line one at a time."""

    def __init__(self, line: str) -> None:
        self._line = line
        self._pos = 0

    def _skip_spaces(self) -> None:
        while self._pos < len(self._line) and self._line[self._pos] == " ":
            self._pos += 1

    def next(self) -> str:
        self._skip_spaces()
        start = self._pos
        while self._pos < len(self._line) and self._line[self._pos] != " ":
            self._pos += 1
        return self._line[start:self._pos]

    def rest(self) -> str:
        self._skip_spaces()
        return self._line[self._pos:]


class CommandProcessor:
    """Reads commands, applies them to a cinema and writes boxed replies."""

    def __init__(self, cinema: Cinema, out: TextIO | None = None) -> None:
        self.cinema = cinema
        self.out = out if out is not None else sys.stdout
        self.current_user: User | None = None
        self.exit_requested = False
        self._commands: dict[str, Callable[[_Tokens], None]] = {
            "help": self._help,
            "register": self._register,
            "login": self._login,
            "logout": self._logout,
            "exit": self._exit,
            "deposit": self._deposit,
            "balance": self._balance,
            "list-movies": self._list_movies,
            "list-halls": self._list_halls,
            "list-tickets": self._list_tickets,
            "list-history": self._list_history,
            "list-users": self._list_users,
            "has-tickets": self._has_tickets,
            "buy-ticket": self._buy_ticket,
            "rate-movie": self._rate_movie,
        }
        self._admin_commands: dict[str, Callable[[_Tokens], None]] = {
            "open-hall": self._open_hall,
            "close-hall": self._close_hall,
            "remove-user": self._remove_user,
            "list-user-history": self._list_user_history,
            "list-user-tickets": self._list_user_tickets,
            "remove-movie": self._remove_movie,
            "update-movie-title": self._update_movie_title,
            "update-movie-hall": self._update_movie_hall,
            "add-movie": self._add_movie,
        }
        self._box("Welcome to MovieApp", "Type 'help' to see available commands\n")

    # ----- output helpers -----

    def _write(self, text: str) -> None:
        self.out.write(text)

    def _box(self, title: str, content: str) -> None:
        self._write(box(title, content))

    def _section(self, title: str, body: str) -> None:
        rule = "-" * (len(title) + 4) + "\n"
        self._write(rule + f"| {title} |\n" + rule + body + rule)

    def _customer(self) -> Customer | None:
        return self.current_user if isinstance(self.current_user, Customer) else None

    def _is_admin(self) -> bool:
        return self.current_user is not None and self.current_user.is_admin()

    # ----- driving -----

    def handle_line(self, line: str) -> None:
        """Parse and carry out one command line.

        Raises ValueError when a numeric argument is missing or malformed.
        """
        tokens = _Tokens(line)
        command = tokens.next()
        handler = self._commands.get(command)
        if handler is not None:
            handler(tokens)
            return
        if self._is_admin():
            admin_handler = self._admin_commands.get(command)
            if admin_handler is not None:
                admin_handler(tokens)
            return
        self._box("Error", f"Unknown or unauthorized command: {command}\n")

    def run(self, lines: Iterable[str] | None = None) -> None:
        """Prompt for and handle lines until input ends or exit is requested."""
        source = iter(lines if lines is not None else sys.stdin)
        while not self.exit_requested:
            self._write(PROMPT)
            self.out.flush()
            line = next(source, None)
            if line is None:
                break
            self.handle_line(line.rstrip("\n"))

    # ----- basic commands -----

    def _help(self, tokens: _Tokens) -> None:
        self._box("Help", HELP_TEXT)

    def _register(self, tokens: _Tokens) -> None:
        name, secret = tokens.next(), tokens.next()
        if not name or not secret:
            self._box("Error", "Username and password cannot be empty\n")
            return
        if self.cinema.register_customer(name, secret):
            self._box("Success", f"Registered {name}\n")
        else:
            self._box("Error", "Registration failed (name taken)\n")

    def _login(self, tokens: _Tokens) -> None:
        name, secret = tokens.next(), tokens.next()
        if not name or not secret:
            self._box("Error", "Username and password cannot be empty\n")
            return
        user = self.cinema.login(name, secret)
        if user is None:
            self._box("Error", "Login failed (wrong credentials)\n")
            return
        self.current_user = user
        self._box("Welcome", f"{name}\n")
        if isinstance(user, Customer):
            self.cinema.expire_past_tickets(user)

    def _logout(self, tokens: _Tokens) -> None:
        if self.current_user is None:
            self._box("Info", "No user logged in\n")
            return
        self._box("Goodbye", f"{self.current_user.name}\n")
        self.current_user = None

    def _exit(self, tokens: _Tokens) -> None:
        self.cinema.save_state()
        self._box("Exiting", "Goodbye!\n")
        self.exit_requested = True

    def _deposit(self, tokens: _Tokens) -> None:
        amount = _to_float(tokens.next())
        if self.current_user is None:
            self._box("Error", "Log in first\n")
            return
        self.current_user.deposit(amount)
        self._box("Success", f"Deposited {amount:f}\n")

    def _balance(self, tokens: _Tokens) -> None:
        if self.current_user is None:
            self._box("Error", "Log in first\n")
            return
        self._box("Balance", f"Your balance is: {self.current_user.balance:f}\n")

    # ----- listings -----

    def _list_movies(self, tokens: _Tokens) -> None:
        self._section("Movie List", self.cinema.list_movies())

    def _list_halls(self, tokens: _Tokens) -> None:
        self._section("Hall Layouts", self.cinema.list_halls())

    def _list_tickets(self, tokens: _Tokens) -> None:
        customer = self._customer()
        if customer is None:
            self._box("Error", "Not a customer\n")
            return
        self._section("Your Tickets", self.cinema.list_tickets(customer))

    def _list_history(self, tokens: _Tokens) -> None:
        customer = self._customer()
        if customer is None:
            self._box("Error", "Not a customer\n")
            return
        self._section("Watch History", self.cinema.list_history(customer))

    def _list_users(self, tokens: _Tokens) -> None:
        if not self._is_admin():
            self._box("Error", "Admin only\n")
            return
        self._section("User List", self.cinema.list_users())

    def _list_user_history(self, tokens: _Tokens) -> None:
        user_id = _to_int(tokens.next())
        self._section("User Watch History", self.cinema.list_user_history(user_id))

    def _list_user_tickets(self, tokens: _Tokens) -> None:
        user_id = _to_int(tokens.next())
        self._section("User Tickets", self.cinema.list_user_tickets(user_id))

    # ----- ticketing -----

    def _has_tickets(self, tokens: _Tokens) -> None:
        movie_id = _to_int(tokens.next())
        if self.cinema.has_tickets(movie_id):
            self._box("Tickets sold?", "Yes, at least one ticket has been sold.\n")
        else:
            self._box("Tickets sold?", "No tickets sold for that showing.\n")

    def _buy_ticket(self, tokens: _Tokens) -> None:
        movie_id = _to_int(tokens.next())
        row = _to_int(tokens.next())
        col = _to_int(tokens.next())
        customer = self._customer()
        if customer is None:
            self._box("Error", "Please log in as customer\n")
            return
        try:
            bought = self.cinema.buy_ticket(customer, movie_id, row, col)
        except ValueError as error:
            self._box("Error", f"{error}\n")
            return
        if bought:
            self._box("Success", "Ticket purchased\n")
        else:
            self._box(
                "Error",
                "Purchase failed (maybe already taken or insufficient funds "
                "or hall is closed)\n",
            )

    def _rate_movie(self, tokens: _Tokens) -> None:
        movie_id = _to_int(tokens.next())
        rating = _to_int(tokens.next())
        customer = self._customer()
        if customer is None:
            self._box("Error", "Please log in as customer\n")
            return
        if self.cinema.rate_movie(customer, movie_id, rating):
            self._box("Success", "Thank you for rating\n")
        else:
            self._box("Error", "Cannot rate this movie\n")

    # ----- administration -----

    def _open_hall(self, tokens: _Tokens) -> None:
        rows = _to_int(tokens.next())
        cols = _to_int(tokens.next())
        hall_id = self.cinema.open_hall(rows, cols)
        self._box("Success", f"Opened hall {hall_id}\n")

    def _close_hall(self, tokens: _Tokens) -> None:
        hall_id = _to_int(tokens.next())
        if self.cinema.close_hall(hall_id):
            self._box("Success", f"Closed hall {hall_id}\n")
        else:
            self._box("Error", "Failed to close hall\n")

    def _remove_user(self, tokens: _Tokens) -> None:
        user_id = _to_int(tokens.next())
        if self.cinema.remove_user(user_id):
            self._box("Success", "Removed user\n")
        else:
            self._box("Error", "Failed to remove user\n")

    def _remove_movie(self, tokens: _Tokens) -> None:
        movie_id = _to_int(tokens.next())
        if self.cinema.remove_movie(movie_id):
            self._box("Success", "Removed movie\n")
        else:
            self._box("Error", "Failed to remove movie\n")

    def _update_movie_title(self, tokens: _Tokens) -> None:
        movie_id = _to_int(tokens.next())
        new_title = tokens.rest()
        if self.cinema.update_movie_title(movie_id, new_title):
            self._box("Success", "Title updated\n")
        else:
            self._box("Error", "Failed to update title\n")

    def _update_movie_hall(self, tokens: _Tokens) -> None:
        movie_id = _to_int(tokens.next())
        new_hall = _to_int(tokens.next())
        if self.cinema.update_movie_hall(movie_id, new_hall):
            self._box("Success", f"Moved to hall {new_hall}\n")
        else:
            self._box(
                "Error",
                "Failed to move movie (hall is busy at that time or invalid hall)\n",
            )

    def _add_movie(self, tokens: _Tokens) -> None:
        genre, title, rating, duration, year, hall, date = (tokens.next() for _ in range(7))
        sh, sm, eh, em = (tokens.next() for _ in range(4))
        if not title or not date:
            self._box("Error", "Movie title and date cannot be empty\n")
            return
        if not valid_date(date):
            self._box("Error", "Date must be in YYYY-MM-DD format\n")
            return
        start_hour, start_min = _to_int(sh), _to_int(sm)
        end_hour, end_min = _to_int(eh), _to_int(em)
        if not valid_time(start_hour, start_min) or not valid_time(end_hour, end_min):
            self._box("Error", "Hours must be 0–23 and minutes 0–59\n")
            return
        if not start_before_end(start_hour, start_min, end_hour, end_min):
            self._box("Error", "Start time must be before end time\n")
            return
        hall_id = _to_int(hall)
        if not self.cinema.is_time_slot_free(
            hall_id, date, start_hour, start_min, end_hour, end_min
        ):
            self._box("Error", "This time slot overlaps an existing showing\n")
            return

        def common() -> dict[str, object]:
            return dict(
                title=title,
                rating=_to_float(rating),
                duration=_to_int(duration),
                year=_to_int(year),
                hall_id=hall_id,
                date=date,
                start_hour=start_hour,
                start_min=start_min,
                end_hour=end_hour,
                end_min=end_min,
            )

        movie: Movie | None
        if genre == "Documentary":
            extra = tokens.next()
            if not extra:
                self._box("Error", "Documentary theme cannot be empty\n")
                return
            movie = self.cinema.add_documentary_movie(
                **common(), theme=extra, based_on_true=_is_true(extra)
            )
        elif genre == "Action":
            intensity = _to_int(tokens.next())
            if not 0 <= intensity <= 20:
                self._box("Error", "Action intensity must be 0–20\n")
                return
            movie = self.cinema.add_action_movie(**common(), action_intensity=intensity)
        elif genre == "Drama":
            extra = tokens.next()
            movie = self.cinema.add_drama_movie(**common(), has_comedy=_is_true(extra))
        else:
            self._box("Error", "Invalid genre\n")
            return
        if movie is not None:
            self._box("Success", f"Added movie [{movie.id}]\n")
        else:
            self._box("Error", "Failed to add movie (invalid hall ID?)\n")


def main(argv: list[str] | None = None) -> int:
    """Run the interactive cinema console."""
    parser = argparse.ArgumentParser(description="Manage a cinema from the console.")
    parser.add_argument(
        "--data-dir", default="data", help="directory holding the data files"
    )
    args = parser.parse_args(argv)
    with Cinema(args.data_dir) as cinema:
        cinema.load_state()
        processor = CommandProcessor(cinema)
        try:
            processor.run()
        except ValueError as error:
            print(f"error: {error}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())