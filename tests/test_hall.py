import pytest

from cinemactl.hall import Hall


def test_new_hall_all_free():
    hall = Hall(1, 3, 4)
    assert hall.is_open
    assert all(hall.is_seat_free(r, c) for r in range(3) for c in range(4))


def test_reserve_and_free_round_trip():
    hall = Hall(1, 2, 2)
    assert hall.reserve_seat(1, 0)
    assert not hall.is_seat_free(1, 0)
    assert not hall.reserve_seat(1, 0)
    assert hall.free_seat(1, 0)
    assert hall.is_seat_free(1, 0)
    assert hall.reserve_seat(1, 0)


@pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (2, 0), (0, 2)])
def test_out_of_bounds(row, col):
    hall = Hall(1, 2, 2)
    assert not hall.reserve_seat(row, col)
    assert not hall.free_seat(row, col)
    assert not hall.is_seat_free(row, col)


@pytest.mark.parametrize("rows,cols", [(0, 5), (5, 0), (-2, 3)])
def test_invalid_dimensions_give_closed_single_seat(rows, cols):
    hall = Hall(7, rows, cols)
    assert (hall.rows, hall.cols) == (1, 1)
    assert not hall.is_open
    assert not hall.reserve_seat(0, 0)
    assert hall.layout() == ""


def test_closed_hall_rejects_reservations_but_frees():
    hall = Hall(1, 2, 2)
    hall.reserve_seat(0, 0)
    hall.close()
    assert not hall.is_open
    assert not hall.reserve_seat(1, 1)
    assert hall.free_seat(0, 0)
    assert hall.is_seat_free(0, 0)


def test_layout_exact():
    hall = Hall(1, 1, 2)
    hall.reserve_seat(0, 1)
    assert hall.layout() == "Hall 1 (1×2) seating:\n. X \n"


def test_layout_shape():
    hall = Hall(4, 3, 5)
    hall.reserve_seat(2, 4)
    lines = hall.layout().splitlines()
    assert lines[0].startswith("Hall 4 ")
    assert len(lines) == 1 + 3
    assert all(len(line.split()) == 5 for line in lines[1:])
    assert lines[3].split()[4] == "X"
    assert sum(line.count("X") for line in lines[1:]) == 1