# domains/logistics.py
"""
Logistics: trucks move packages inside a city, planes move them between
city airports. Everything is driven by unigoal methods on 'at', 'truck_at'
and 'plane_at'.

Object types are stored in the state as boolean facts (packages[p] = True,
trucks[t] = True, ...) and in_city maps every location to its city.
"""

from domain import Domain, m_split_multigoal
from multigoal import Multigoal
from plan_items import action, unigoal
from state import State


def initial_state(name="state1"):
    state = State(name)
    state.set("at", "package1", "location1")
    state.set("at", "package2", "location2")
    state.set("truck_at", "truck1", "location3")
    state.set("truck_at", "truck6", "location10")
    state.set("plane_at", "plane2", "airport2")

    for location, city in (("location1", "city1"), ("location2", "city1"),
                           ("location3", "city1"), ("airport1", "city1"),
                           ("location10", "city2"), ("airport2", "city2")):
        state.set("in_city", location, city)
        state.set("locations", location, True)

    for var, names in (("packages", ("package1", "package2")),
                       ("trucks", ("truck1", "truck6")),
                       ("airplanes", ("plane2",)),
                       ("airports", ("airport1", "airport2")),
                       ("cities", ("city1", "city2"))):
        for n in names:
            state.set(var, n, True)
    return state


def goal(name, **targets):
    """Multigoal placing each package (keyword) at a location (value)."""
    return Multigoal(name, {"at": targets})


# --- type and location helpers ---------------------------------------------

def _is(state, kind, obj):
    return state.get(kind, obj) is True


def is_package(state, obj):
    return _is(state, "packages", obj)


def is_truck(state, obj):
    return _is(state, "trucks", obj)


def is_plane(state, obj):
    return _is(state, "airplanes", obj)


def is_location(state, obj):
    return _is(state, "locations", obj)


def is_airport(state, obj):
    return _is(state, "airports", obj)


def city_of(state, obj):
    """City of a location, or of the location a truck or plane is at."""
    if is_truck(state, obj):
        obj = state.get("truck_at", obj)
    elif is_plane(state, obj):
        obj = state.get("plane_at", obj)
    return state.get("in_city", obj)


def find_truck(state, city):
    for truck in state.var_args("trucks") or []:
        if city_of(state, truck) == city:
            return truck
    return None


def find_plane(state, city):
    """A plane already in city if there is one, else any plane."""
    planes = [p for p in state.var_args("airplanes") or [] if is_plane(state, p)]
    for plane in planes:
        if city_of(state, plane) == city:
            return plane
    return planes[0] if planes else None


def find_airport(state, city):
    for airport in state.var_args("airports") or []:
        if state.get("in_city", airport) == city:
            return airport
    return None


# --- actions ---------------------------------------------------------------

def drive_truck(state, t, loc):
    if is_truck(state, t) and is_location(state, loc) and city_of(state, t) == city_of(state, loc):
        state.set("truck_at", t, loc)
        return state


def load_truck(state, p, t):
    if is_package(state, p) and is_truck(state, t) \
            and state.get("at", p) == state.get("truck_at", t):
        state.set("at", p, t)
        return state


def unload_truck(state, p, loc):
    t = state.get("at", p)
    if is_truck(state, t) and state.get("truck_at", t) == loc:
        state.set("at", p, loc)
        return state


def fly_plane(state, plane, airport):
    if is_plane(state, plane) and is_airport(state, airport):
        state.set("plane_at", plane, airport)
        return state


def load_plane(state, p, plane):
    if is_package(state, p) and is_plane(state, plane) \
            and state.get("at", p) == state.get("plane_at", plane):
        state.set("at", p, plane)
        return state


def unload_plane(state, p, airport):
    plane = state.get("at", p)
    if is_plane(state, plane) and state.get("plane_at", plane) == airport:
        state.set("at", p, airport)
        return state


# --- unigoal methods for 'at' ----------------------------------------------

def m_load_truck(state, p, t):
    if is_truck(state, t) and state.get("at", p) == state.get("truck_at", t):
        return [action("load_truck", p, t)]


def m_unload_truck(state, p, loc):
    if is_location(state, loc) and is_truck(state, state.get("at", p)):
        return [action("unload_truck", p, loc)]


def m_load_plane(state, p, plane):
    if is_plane(state, plane) and state.get("at", p) == state.get("plane_at", plane):
        return [action("load_plane", p, plane)]


def m_unload_plane(state, p, airport):
    if is_airport(state, airport) and is_plane(state, state.get("at", p)):
        return [action("unload_plane", p, airport)]


def m_move_within_city(state, p, loc):
    if not (is_package(state, p) and is_location(state, loc)):
        return None
    here = state.get("at", p)
    if not is_location(state, here) or city_of(state, here) != city_of(state, loc):
        return None
    truck = find_truck(state, city_of(state, here))
    if truck is None:
        return None
    return [unigoal("truck_at", truck, here), unigoal("at", p, truck),
            unigoal("truck_at", truck, loc), unigoal("at", p, loc)]


def m_fly_between_airports(state, p, airport):
    if not (is_package(state, p) and is_airport(state, airport)):
        return None
    here = state.get("at", p)
    if not is_airport(state, here) or city_of(state, here) == city_of(state, airport):
        return None
    plane = find_plane(state, city_of(state, here))
    if plane is None:
        return None
    return [unigoal("plane_at", plane, here), unigoal("at", p, plane),
            unigoal("plane_at", plane, airport), unigoal("at", p, airport)]


def m_move_between_cities(state, p, loc):
    if not (is_package(state, p) and is_location(state, loc)):
        return None
    here = state.get("at", p)
    if not is_location(state, here) or city_of(state, here) == city_of(state, loc):
        return None
    # airport to airport is m_fly_between_airports' job
    if is_airport(state, here) and is_airport(state, loc):
        return None
    source = find_airport(state, city_of(state, here))
    target = find_airport(state, city_of(state, loc))
    if source is None or target is None:
        return None
    return [unigoal("at", p, source), unigoal("at", p, target), unigoal("at", p, loc)]


# --- unigoal methods for vehicles ------------------------------------------

def m_drive_truck(state, t, loc):
    if is_truck(state, t) and is_location(state, loc) and city_of(state, t) == city_of(state, loc):
        return [action("drive_truck", t, loc)]


def m_fly_plane(state, plane, airport):
    if is_plane(state, plane) and is_airport(state, airport):
        return [action("fly_plane", plane, airport)]


def make_domain(name="logistics"):
    domain = Domain(name)
    domain.declare_actions(drive_truck, load_truck, unload_truck,
                           fly_plane, load_plane, unload_plane)
    domain.declare_unigoal_methods("at", m_load_truck, m_unload_truck, m_load_plane,
                                   m_unload_plane, m_move_within_city,
                                   m_fly_between_airports, m_move_between_cities)
    domain.declare_unigoal_methods("truck_at", m_drive_truck)
    domain.declare_unigoal_methods("plane_at", m_fly_plane)
    domain.declare_multigoal_method(m_split_multigoal)
    return domain
