"""Users, customers, administrators and tickets."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Ticket:
    """A purchased seat for a showing."""

    id: int
    movie_id: int
    row: int
    col: int
    price: float

    def describe(self) -> str:
        return (
            f"[Ticket {self.id}] movie={self.movie_id} "
            f"seat=({self.row},{self.col}) price={self.price:g}"
        )

    def __str__(self) -> str:
        return self.describe()


@dataclass(eq=False)
class User:
    """An account with a name, a password and a balance."""

    id: int
    name: str
    password: str
    balance: float = 0.0

    def is_admin(self) -> bool:
        return False

    def authenticate(self, password: str) -> bool:
        return self.password == password

    def deposit(self, amount: float) -> None:
        """Add funds; non-positive amounts are ignored."""
        if amount > 0:
            self.balance += amount

    def charge(self, amount: float) -> bool:
        """Deduct funds; False if the amount is negative or exceeds the balance."""
        if amount < 0 or self.balance < amount:
            return False
        self.balance -= amount
        return True


@dataclass(eq=False)
class Admin(User):
    """An administrator account."""

    def is_admin(self) -> bool:
        return True


@dataclass(eq=False)
class Customer(User):
    """A customer holding upcoming tickets and a watch history."""

    upcoming_tickets: list[Ticket] = field(default_factory=list)
    watch_history: list[int] = field(default_factory=list)

    def add_ticket(self, ticket: Ticket) -> None:
        self.upcoming_tickets.append(ticket)

    def remove_ticket(self, ticket_id: int) -> bool:
        """Drop the ticket with this id; False if there is none."""
        for index, ticket in enumerate(self.upcoming_tickets):
            if ticket.id == ticket_id:
                del self.upcoming_tickets[index]
                return True
        return False

    def add_to_history(self, movie_id: int) -> None:
        self.watch_history.append(movie_id)

    def remove_from_history(self, movie_id: int) -> None:
        """Drop the first occurrence of a movie from the history, if present."""
        if movie_id in self.watch_history:
            self.watch_history.remove(movie_id)