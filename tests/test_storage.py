import pytest

from cinemactl.hall import Hall
from cinemactl.movies import ActionMovie, DocumentaryMovie, DramaMovie
from cinemactl.storage import (
    HALLS_FILE,
    MOVIES_FILE,
    USERS_FILE,
    CinemaState,
    format_number,
    load_state,
    save_state,
)
from cinemactl.users import Admin, Customer, Ticket


def _movie_args(movie_id, hall_id=1):
    return dict(
        id=movie_id,
        title="Heat",
        rating=8.5,
        duration=120,
        year=1995,
        hall_id=hall_id,
        date="2030-01-02",
        start_hour=9,
        start_min=5,
        end_hour=11,
        end_min=30,
    )


def _sample_state():
    hall = Hall(1, 2, 3)
    hall.reserve_seat(0, 1)
    hall.reserve_seat(1, 2)
    other = Hall(4, 1, 2)
    movies = [
        ActionMovie(**_movie_args(1), action_intensity=7),
        DramaMovie(**_movie_args(2), has_comedy_elements=True),
        DocumentaryMovie(**_movie_args(5, hall_id=-1), theme="nature", based_on_true=False),
    ]
    password = "password"
    admin = Admin(1, "admin", password)
    customer = Customer(3, "alice", password, 42.5)
    customer.add_ticket(Ticket(6, 1, 0, 1, 19.5))
    customer.add_ticket(Ticket(2, 2, 1, 2, 9.0))
    customer.add_to_history(2)
    customer.add_to_history(5)
    return CinemaState(halls=[hall, other], movies=movies, users=[admin, customer])


def test_format_number_plain_values():
    assert format_number(9.5) == "9.5"
    assert format_number(42.0) == "42"


def test_format_number_large_value_uses_exponent():
    assert format_number(1e8) == "1e+08"


def test_load_missing_directory_is_empty(tmp_path):
    state = load_state(tmp_path / "absent")
    assert state.halls == []
    assert state.movies == []
    assert state.users == []
    assert (state.next_hall_id, state.next_movie_id, state.next_user_id, state.next_ticket_id) == (1, 1, 1, 1)


def test_hall_file_format(tmp_path):
    hall = Hall(1, 2, 2)
    hall.reserve_seat(0, 1)
    save_state(tmp_path, CinemaState(halls=[hall]))
    assert (tmp_path / HALLS_FILE).read_text(encoding="utf-8") == "1 1 2 2\n1 0 \n1 1 \n"


def test_halls_round_trip(tmp_path):
    original = _sample_state()
    save_state(tmp_path, original)
    loaded = load_state(tmp_path)
    assert [h.id for h in loaded.halls] == [h.id for h in original.halls]
    for before, after in zip(original.halls, loaded.halls):
        assert (after.rows, after.cols) == (before.rows, before.cols)
        assert after.layout() == before.layout()
    assert loaded.halls[0].is_seat_free(0, 1) is False
    assert loaded.halls[0].is_seat_free(0, 0) is True


def test_movies_round_trip(tmp_path):
    original = _sample_state()
    save_state(tmp_path, original)
    loaded = load_state(tmp_path)
    assert [type(m) for m in loaded.movies] == [ActionMovie, DramaMovie, DocumentaryMovie]
    assert [m.describe() for m in loaded.movies] == [m.describe() for m in original.movies]
    assert loaded.movies[0].action_intensity == 7
    assert loaded.movies[1].has_comedy_elements is True
    assert loaded.movies[2].theme == "nature"
    assert loaded.movies[2].based_on_true is False
    assert loaded.movies[2].hall_id == -1


def test_users_round_trip(tmp_path):
    original = _sample_state()
    save_state(tmp_path, original)
    loaded = load_state(tmp_path)
    admin, customer = loaded.users
    assert admin.is_admin()
    assert admin.authenticate("password")
    assert isinstance(customer, Customer)
    assert customer.name == "alice"
    assert customer.balance == 42.5
    assert customer.upcoming_tickets == original.users[1].upcoming_tickets
    assert customer.watch_history == [2, 5]


def test_next_ids_follow_highest_loaded(tmp_path):
    save_state(tmp_path, _sample_state())
    loaded = load_state(tmp_path)
    assert loaded.next_hall_id == 5
    assert loaded.next_movie_id == 6
    assert loaded.next_user_id == 4
    assert loaded.next_ticket_id == 7


def test_users_file_has_labelled_sections(tmp_path):
    save_state(tmp_path, _sample_state())
    lines = (tmp_path / USERS_FILE).read_text(encoding="utf-8").splitlines()
    assert lines[0].split() == ["1", "admin", "0", "admin", "password"]
    assert lines[1].split() == ["3", "alice", "42.5", "customer", "password"]
    assert lines[2] == "Tickets: 2"
    assert lines[5] == "History: 2"
    assert lines[6].split() == ["2", "5"]


def test_movie_line_fields(tmp_path):
    save_state(tmp_path, _sample_state())
    lines = (tmp_path / MOVIES_FILE).read_text(encoding="utf-8").splitlines()
    assert lines[0].split()[:3] == ["1", "Action", "Heat"]
    assert lines[0].split()[-1] == "7"
    assert lines[2].split()[-2:] == ["nature", "0"]


def test_unknown_genre_is_skipped(tmp_path):
    (tmp_path / MOVIES_FILE).write_text(
        "3 Horror Fog 7 90 2000 1 2030-01-01 10 0 11 30\n", encoding="utf-8"
    )
    state = load_state(tmp_path)
    assert state.movies == []
    assert state.next_movie_id == 1


def test_invalid_action_intensity_raises(tmp_path):
    (tmp_path / MOVIES_FILE).write_text(
        "1 Action Boom 7 90 2000 1 2030-01-01 10 0 11 30 25\n", encoding="utf-8"
    )
    with pytest.raises(ValueError):
        load_state(tmp_path)


def test_truncated_hall_record_stops_loading(tmp_path):
    (tmp_path / HALLS_FILE).write_text("1 1 1 2\n1 1 \n2 1 3\n", encoding="utf-8")
    state = load_state(tmp_path)
    assert [h.id for h in state.halls] == [1]
    assert state.next_hall_id == 2


def test_save_creates_directory(tmp_path):
    target = tmp_path / "nested" / "data"
    save_state(target, _sample_state())
    loaded = load_state(target)
    assert len(loaded.users) == 2
    assert len(loaded.movies) == 3


def test_reloaded_rating_keeps_average(tmp_path):
    state = _sample_state()
    state.movies[0].add_rating(10)
    save_state(tmp_path, state)
    loaded = load_state(tmp_path)
    assert loaded.movies[0].rating == pytest.approx(state.movies[0].rating, rel=1e-5)