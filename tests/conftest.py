# tests/conftest.py
"""
Shared pytest fixtures for the planner test suite.
"""

import pytest

from domains import backtracking, blocks, logistics, simple_hgn, simple_htn
from htn_planner import PlannerBuilder

STRATEGIES = ["recursive", "iterative"]


def make_planner(domain, strategy="iterative", verbose_level=0, verify_goals=True):
    return (PlannerBuilder()
            .with_domain(domain)
            .with_strategy(strategy)
            .with_verbose_level(verbose_level)
            .with_goal_verification(verify_goals)
            .build())


@pytest.fixture(params=STRATEGIES)
def strategy(request):
    """Run a test once per search engine."""
    return request.param


@pytest.fixture
def planner_for(strategy):
    """Factory: planner_for(domain, **options) -> planner using the current strategy."""
    def factory(domain, **options):
        return make_planner(domain, strategy=strategy, **options)
    return factory


@pytest.fixture
def travel_domain():
    return simple_htn.make_domain()


@pytest.fixture
def travel_state():
    return simple_htn.initial_state()


@pytest.fixture
def hgn_domain():
    return simple_hgn.make_domain()


@pytest.fixture
def backtracking_domain():
    return backtracking.make_domain()


@pytest.fixture
def blocks_domain():
    return blocks.make_domain()


@pytest.fixture
def logistics_domain():
    return logistics.make_domain()


@pytest.fixture
def build_planner():
    """The planner factory itself, for tests that compare strategies."""
    return make_planner
