import pytest

from cinemactl.users import Admin, Customer, Ticket, User

PASSWORD = "password"


def test_authenticate():
    user = User(1, "alice", PASSWORD)
    assert user.authenticate(PASSWORD)
    assert not user.authenticate("secret")


def test_default_balance_and_admin_flag():
    user = User(1, "alice", PASSWORD)
    assert user.balance == 0.0
    assert user.is_admin() is False


def test_admin_and_customer_flags():
    assert Admin(1, "admin", PASSWORD).is_admin() is True
    assert Customer(2, "bob", PASSWORD).is_admin() is False


def test_deposit_positive_only():
    user = User(1, "alice", PASSWORD, 10.0)
    user.deposit(5.0)
    assert user.balance == pytest.approx(15.0)
    user.deposit(0)
    user.deposit(-3.0)
    assert user.balance == pytest.approx(15.0)


def test_charge():
    user = User(1, "alice", PASSWORD, 10.0)
    assert not user.charge(10.5)
    assert user.balance == 10.0
    assert not user.charge(-1.0)
    assert user.balance == 10.0
    assert user.charge(10.0)
    assert user.balance == 0.0


def test_deposit_then_charge_round_trip():
    user = Customer(1, "bob", PASSWORD, 3.0)
    user.deposit(4.25)
    assert user.charge(4.25)
    assert user.balance == pytest.approx(3.0)


def test_customer_tickets():
    customer = Customer(2, "bob", PASSWORD)
    first = Ticket(1, 10, 0, 0, 9.0)
    second = Ticket(2, 11, 1, 1, 7.0)
    customer.add_ticket(first)
    customer.add_ticket(second)
    assert customer.upcoming_tickets == [first, second]
    assert customer.remove_ticket(1)
    assert customer.upcoming_tickets == [second]
    assert not customer.remove_ticket(1)
    assert customer.upcoming_tickets == [second]


def test_customers_do_not_share_lists():
    one = Customer(1, "a", PASSWORD)
    two = Customer(2, "b", PASSWORD)
    one.add_ticket(Ticket(1, 1, 0, 0, 1.0))
    one.add_to_history(5)
    assert two.upcoming_tickets == []
    assert two.watch_history == []


def test_history_removes_first_occurrence():
    customer = Customer(2, "bob", PASSWORD)
    for movie_id in (3, 4, 3):
        customer.add_to_history(movie_id)
    customer.remove_from_history(3)
    assert customer.watch_history == [4, 3]
    customer.remove_from_history(99)
    assert customer.watch_history == [4, 3]


def test_ticket_describe():
    assert Ticket(1, 2, 3, 4, 12.5).describe() == "[Ticket 1] movie=2 seat=(3,4) price=12.5"


def test_ticket_describe_whole_price():
    ticket = Ticket(7, 8, 0, 1, 12.0)
    assert str(ticket) == "[Ticket 7] movie=8 seat=(0,1) price=12"


def test_ticket_is_immutable():
    ticket = Ticket(1, 2, 3, 4, 5.0)
    with pytest.raises(AttributeError):
        ticket.price = 1.0
    assert ticket.price == 5.0
    assert ticket.describe() == "[Ticket 1] movie=2 seat=(3,4) price=5"