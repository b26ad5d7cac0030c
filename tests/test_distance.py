import pytest

from droneplan.distance import (
    PLOT_SIZE,
    Tree,
    calculate_drone_distance,
    max_distance_drone,
)

NORMAL_TREES = [Tree(2, 1, 10), Tree(3, 1, 20), Tree(4, 1, 10)]


def test_worked_example_from_api_scenario():
    assert calculate_drone_distance(5, 1, NORMAL_TREES) == 82


def test_zero_width_estate_has_no_flight():
    assert calculate_drone_distance(7, 0, []) == 0


@pytest.mark.parametrize("height", [1, 5, 30])
def test_interior_tree_adds_climb_and_descent(height):
    flat = calculate_drone_distance(5, 3, [])
    with_tree = calculate_drone_distance(5, 3, [Tree(3, 2, height)])
    assert with_tree - flat == 2 * height


def test_tree_order_does_not_matter():
    forward = calculate_drone_distance(5, 1, NORMAL_TREES)
    backward = calculate_drone_distance(5, 1, list(reversed(NORMAL_TREES)))
    assert forward == backward


def test_duplicate_tree_last_one_wins():
    duplicated = calculate_drone_distance(4, 2, [Tree(2, 1, 5), Tree(2, 1, 20)])
    single = calculate_drone_distance(4, 2, [Tree(2, 1, 20)])
    assert duplicated == single


def test_each_extra_row_adds_at_least_two_plot_moves():
    one_row = calculate_drone_distance(3, 1, [])
    two_rows = calculate_drone_distance(3, 2, [])
    assert two_rows - one_row >= 2 * PLOT_SIZE


@pytest.mark.parametrize("length, width", [(-1, 2), (3, -4)])
def test_negative_dimensions_rejected(length, width):
    with pytest.raises(ValueError):
        calculate_drone_distance(length, width, [])
    with pytest.raises(ValueError):
        max_distance_drone(length, width, [], 100)


def test_max_distance_unlimited_reaches_last_plot_of_east_row():
    assert max_distance_drone(5, 1, NORMAL_TREES, 10_000) == (5, 1)


def test_max_distance_unlimited_reaches_last_plot_of_west_row():
    assert max_distance_drone(5, 2, [], 10_000) == (1, 2)


def test_max_distance_zero_stops_at_first_plot():
    assert max_distance_drone(5, 1, NORMAL_TREES, 0) == (1, 1)


def test_max_distance_on_empty_estate_returns_origin():
    assert max_distance_drone(5, 0, [], 100) == (0, 0)


def test_max_distance_stops_mid_row():
    assert max_distance_drone(5, 1, NORMAL_TREES, 70) == (4, 1)


@pytest.mark.parametrize("length, width", [(5, 1), (4, 3), (2, 2)])
def test_full_flight_budget_visits_every_plot(length, width):
    total = calculate_drone_distance(length, width, [Tree(1, 1, 3)])
    unlimited = max_distance_drone(length, width, [Tree(1, 1, 3)], 10_000)
    assert max_distance_drone(length, width, [Tree(1, 1, 3)], total) == unlimited


def test_stop_point_moves_forward_with_larger_budget():
    order = [(x, 1) for x in range(1, 6)]
    positions = [
        order.index(max_distance_drone(5, 1, NORMAL_TREES, budget))
        for budget in range(0, 100, 5)
    ]
    assert positions == sorted(positions)