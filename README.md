# cinemactl

`cinemactl` manages a small cinema from the terminal. It keeps halls and
their seat maps, a programme of showings, and customer accounts with a
balance, purchased tickets and a watch history. The state is kept in plain
text files in a data directory, so it survives between sessions.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## The command shell

Start an interactive session with:

```
cinemactl
```

The state is read from and written to the directory `data` in the current
working directory; choose another one with `--data-dir`:

```
cinemactl --data-dir /path/to/state
```

The shell prints a prompt (`-> `) and reads one command per line from
standard input; arguments are separated by spaces. Results are shown in
small framed boxes. A built-in administrator account (`admin` / `admin`)
is always present.

Commands available to everyone (most of them need someone logged in):

```
register <user> <pwd>
login <user> <pwd>
logout
exit
help
deposit <amount>
balance
list-movies
list-halls
list-tickets
list-history
list-users
has-tickets <movieId>
buy-ticket <movieId> <row> <col>
rate-movie <movieId> <rating>
```

`list-tickets`, `list-history`, `buy-ticket` and `rate-movie` need a
logged-in customer; `list-users` needs a logged-in administrator;
`deposit` and `balance` need any logged-in user.

Commands for a logged-in administrator:

```
open-hall <rows> <cols>
close-hall <hallId>
add-movie <genre> <title> <rating> <duration> <year> <hallId> <date> <sh> <sm> <eh> <em> [extra]
remove-movie <movieId>
update-movie-title <movieId> <new title>
update-movie-hall <movieId> <new hallId>
remove-user <userId>
list-user-history <userId>
list-user-tickets <userId>
```

The state is saved when `exit` is given and again when the session ends,
including at end of input. A numeric argument that is missing or cannot be
read ends the session with an error message and exit status 1 (the state
is still saved).

A short session:

```
-> login admin admin
-> open-hall 5 8
-> add-movie Action Skyfall 7.8 143 2012 1 2030-06-14 20 0 22 30 12
-> logout
-> register alice password
-> login alice password
-> deposit 50
-> buy-ticket 1 2 3
-> list-tickets
-> exit
```

### Genres and the `extra` argument

`add-movie` accepts three genres; the last argument depends on the genre:

| Genre         | `extra`                                     | Ticket price                           |
|---------------|---------------------------------------------|----------------------------------------|
| `Action`      | action intensity, 0 to 20                   | 9.00 + 1.50 per intensity point        |
| `Drama`       | `1` or `true` if it has comedy elements     | 7.00, plus 2.00 with comedy            |
| `Documentary` | the theme (required)                        | 5.00, plus 3.00 if based on true events |

From the shell, a documentary counts as based on true events only when its
theme is written as `1` or `true`.

Dates are written `YYYY-MM-DD`, times as hour and minute (0–23, 0–59), and
a showing must start before it ends. A new showing is refused if it
overlaps another showing in the same hall on the same date, or if the hall
does not exist. A showing can only be moved to an existing hall that is
free at that time.

### Tickets, halls and history

* A ticket can only be bought for a showing that has not started yet, with
  a hall, for a free seat, and only if the balance covers the price.
* A hall opened with a non-positive number of rows or columns becomes a
  closed 1×1 hall in which no seat can be reserved; closed halls are left
  out of `list-halls`.
* Closing a hall removes it and refunds every ticket for its showings; those
  showings are then listed with hall `closed`.
* Removing a showing refunds its tickets and drops it from watch histories.
* When a customer logs in, tickets for showings dated before today move into
  the watch history.
* `rate-movie` is accepted only for showings in the customer's watch
  history; the showing's stored rating is not changed by it.
* Removing a customer frees the seats they held; administrators cannot be
  removed.

## Using the library

The same operations are available from Python through
`cinemactl.cinema.Cinema`. Methods report failure by returning `False` or
`None`; listings are returned as strings. Used as a context manager, a
`Cinema` saves its state on exit.

```python
from datetime import datetime

from cinemactl.cinema import Cinema

with Cinema("data") as cinema:
    cinema.load_state()
    hall_id = cinema.open_hall(5, 8)
    movie = cinema.add_drama_movie(
        "Amelie", 8.3, 122, 2001, hall_id, "2030-06-14", 18, 0, 20, 2, True
    )

    password = "password"
    cinema.register_customer("alice", password)
    alice = cinema.login("alice", password)
    alice.deposit(20)

    cinema.buy_ticket(alice, movie.id, 0, 0, datetime(2030, 6, 1, 12, 0))
    print(cinema.list_tickets(alice))
```

`buy_ticket` takes the current time as an optional `now` argument and
`expire_past_tickets` takes an optional `today`; both default to the local
clock.

The other modules can be used on their own:

* `cinemactl.hall` — `Hall`, a seat grid with `reserve_seat`, `free_seat`,
  `is_seat_free` and `layout`.
* `cinemactl.movies` — `ActionMovie`, `DramaMovie` and `DocumentaryMovie`,
  with `calculate_price`, `add_rating` and `describe`.
* `cinemactl.users` — `User`, `Admin`, `Customer` and `Ticket`.
* `cinemactl.storage` — `load_state` and `save_state` read and write a
  `CinemaState` as `halls.txt`, `movies.txt` and `users.txt` in a directory;
  missing files are read as empty.
* `cinemactl.cli` — `CommandProcessor`, which handles command lines against
  a `Cinema` and writes replies to a text stream, and `box`, which draws the
  framed boxes.

## Limitations

* Passwords are stored in the data files as plain text.
* The data files are whitespace-separated, so titles, names and themes
  containing spaces (possible through `update-movie-title`) do not load back
  correctly.
* There is no locking: two sessions sharing one data directory overwrite
  each other's changes.
* Balances are plain numbers; no payment is taken from anywhere.