# droneplan

`droneplan` is a small HTTP service for plantation estates. An estate is a
rectangle of 10 m × 10 m plots, and trees of known height stand on some of
those plots. The service stores estates and trees in SQLite, reports
statistics on the trees, and works out how far a monitoring drone flies to
survey the whole estate.

## How the drone flies

The drone takes off from plot (1, 1) and sweeps the estate row by row. It
flies east along odd rows and west along even rows, and moves north 10 m
between rows. Over each plot it flies 1 m above whatever is there: 1 m above
the ground on an empty plot, or 1 m above the tree top. The distance counts:

- every climb and descent,
- each 10 m hop between plots,
- the final landing at the end.

The calculation works without any server:

```python
from droneplan.distance import Tree, calculate_drone_distance, max_distance_drone

trees = [Tree(2, 1, 10), Tree(3, 1, 20), Tree(4, 1, 10)]

calculate_drone_distance(5, 1, trees)        # 82
max_distance_drone(5, 1, trees, 30)          # (2, 1)
```

`max_distance_drone` returns an `(x, y)` tuple. It gives the plot at which
the distance flown first exceeds the limit. If the whole survey fits within
the limit, it gives the last plot visited instead, and `(0, 0)` if the estate
has no plots. Both functions raise `ValueError` for a negative length or
width. Each step of the flight is logged at debug level through the
`droneplan.distance` logger.

## Storage

`droneplan.repository.Repository` keeps estates and trees in an SQLite
database. The `dsn` given to it is a database file path, or `":memory:"` for
a database that lives only in memory. The tables are created when the
repository opens. A repository can be used as a context manager, which closes
it on exit.

```python
from droneplan.repository import Repository

with Repository("estates.db") as repo:
    estate_id = repo.create_estate(width=1, length=5)      # uuid.UUID
    repo.create_tree(estate_id, x=2, y=1, height=10)       # uuid.UUID
    detail = repo.get_detail_estate(estate_id)             # EstateDetail
```

`get_detail_estate` returns an `EstateDetail` holding `id`, `width`, `length`
and `trees`. `trees` is a list of `TreeRecord` (`id`, `x`, `y`, `height`) in
the order they were stored. `get_test_by_id` returns the `name` stored under
an id in the `test` table.

Looking up an estate or test record that does not exist raises
`NotFoundError`. Any other database failure, or an estate id that is not a
valid UUID, raises `RepositoryError`. `NotFoundError` is a subclass of
`RepositoryError`. Any object that follows `RepositoryProtocol` can stand in
for the repository, which is useful in tests.

## The HTTP API

`droneplan.server.create_app(repository)` builds a Flask application around
a repository:

```python
from droneplan.repository import Repository
from droneplan.server import create_app

app = create_app(Repository("estates.db"))
app.run(port=1323)
```

| Method | Path                                          | Response                                              |
|--------|-----------------------------------------------|-------------------------------------------------------|
| GET    | `/hello?id=<n>`                               | `{"message": "Hello User <n>"}`                       |
| POST   | `/estate`                                     | Creates an estate from `{"length": …, "width": …}`, returns `{"id": …}` |
| POST   | `/estate/<id>/tree`                           | Plants a tree from `{"x": …, "y": …, "height": …}`, returns `{"id": …}` |
| GET    | `/estate/<id>/stats`                          | `{"count", "min", "max", "median"}` of tree heights   |
| GET    | `/estate/<id>/drone-plan`                     | `{"totalDistance": …}` for a full survey              |
| GET    | `/estate/<id>/drone-plan?max_distance=<n>`    | `{"maxDistance": n, "rest": {"x": …, "y": …}}`        |

Every error is answered with a JSON body `{"message": …}`.

Status 400 covers:

- `/hello` without an integer `id`,
- a malformed JSON body or a non-integer field (a missing field counts as 0),
- a width, length, `x`, `y` or `height` that is not positive,
- a tree outside the estate,
- a second tree on the same plot,
- an estate id that is not a UUID,
- a non-integer `max_distance`.

An unknown estate, or any other storage failure, is answered with status 500.

For an estate without trees, `/stats` reports zeros. Otherwise `median` is
computed as the first stored height plus the sum of all heights, divided by
the count, rounded down. For heights 10, 20 and 10 this gives 16.

The same operations are available as methods of `droneplan.server.Server`,
without going through HTTP:

- `get_hello`,
- `post_estate`,
- `post_estate_tree`,
- `get_estate_stats`,
- `get_drone_plan`,
- `get_drone_plan_max`.

Each returns a `(body, status)` pair.

## What is not included

The package has no command-line program and no configuration for running the
service. It provides the Flask application object only. Serving it is left to
the caller, for example with Flask's development server as shown above or with
any WSGI server. Storage is SQLite only.