import warnings
from enum import Enum

import config
from domain import Domain
from errors import Generic, InvalidDomainConfiguration, InvalidVerboseLevel
from lazy_lookahead import run_lazy_lookahead
from log import logger
from multigoal import Multigoal
from plan_items import format_todo_list
from search import IterativeSearch, RecursiveSearch, SearchContext
from state import State


class PlanningStrategy(Enum):
    RECURSIVE = "recursive"
    ITERATIVE = "iterative"

    @classmethod
    def coerce(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise Generic(f"Unknown planning strategy {value!r}; use 'recursive' or 'iterative'") from None


def _check_verbose_level(level):
    if isinstance(level, bool) or not isinstance(level, int) or not 0 <= level <= 3:
        raise InvalidVerboseLevel(level)
    return level


class HTNPlanner:
    """
    Hierarchical task/goal network planner that generates a plan by depth-first
    decomposition of a todo list, backtracking over the domain's methods.

    A planner is fixed at construction (domain, strategy, verbosity, goal
    verification) and keeps no state between calls, so one instance can be
    used repeatedly and from several threads. Build it with PlannerBuilder.
    """

    def __init__(self, domain, strategy=config.DEFAULT_STRATEGY,
                 verbose_level=config.DEFAULT_VERBOSE_LEVEL,
                 verify_goals=config.DEFAULT_VERIFY_GOALS, multigoals=None):
        """
        Args:
            domain (Domain): Actions, commands and methods to plan with.
            strategy (PlanningStrategy or str): Search engine to use.
            verbose_level (int): 0 (silent) to 3 (every search step).
            verify_goals (bool): Re-check goals after their methods have been fully resolved.
            multigoals (dict): Pre-registered multigoals, keyed by goal id.
        """
        if not isinstance(domain, Domain):
            raise InvalidDomainConfiguration(f"a planner needs a Domain, got {domain!r}")
        self._domain = domain
        self._strategy = PlanningStrategy.coerce(strategy)
        self._verbose_level = _check_verbose_level(verbose_level)
        self._verify_goals = bool(verify_goals)
        self._multigoals = dict(multigoals or {})

    @property
    def domain(self):
        return self._domain

    @property
    def strategy(self):
        return self._strategy

    @property
    def verbose_level(self):
        return self._verbose_level

    @property
    def verify_goals(self):
        return self._verify_goals

    @property
    def multigoals(self):
        return dict(self._multigoals)

    def get_multigoal(self, goal_id):
        goal = self._multigoals.get(goal_id)
        return goal.copy(goal.name) if goal is not None else None

    def is_verbose(self, level):
        return self._verbose_level >= level

    def with_options(self, **changes):
        """Return a new planner with some settings changed; this one is left as is."""
        options = {
            "domain": self._domain,
            "strategy": self._strategy,
            "verbose_level": self._verbose_level,
            "verify_goals": self._verify_goals,
            "multigoals": self._multigoals,
        }
        unknown = set(changes) - set(options)
        if unknown:
            raise Generic(f"Unknown planner options: {', '.join(sorted(unknown))}")
        options.update(changes)
        return HTNPlanner(**options)

    def _search_engine(self):
        context = SearchContext(self._domain, self._verify_goals, self._verbose_level)
        if self._strategy is PlanningStrategy.RECURSIVE:
            return RecursiveSearch(context)
        return IterativeSearch(context)

    def find_plan(self, state, todo_list):
        """
        Search for a sequence of actions that accomplishes todo_list from state.

        Args:
            state (State): Starting world state; it is not modified.
            todo_list (list): Actions, tasks, unigoals and multigoals to accomplish, in order.

        Returns:
            list: The plan as a list of Action items, or None if no plan exists.

        Raises:
            InvalidItemType: if the todo list (or a method's output) holds something that is not a plan item.
        """
        if not isinstance(state, State):
            raise Generic(f"find_plan needs a State, got {state!r}")
        todo_list = list(todo_list)
        if self.is_verbose(1):
            logger.info(f"FP> find_plan, verbose={self._verbose_level}, strategy={self._strategy.value}:")
            logger.info(f"    state = {state.name}")
            logger.info(f"    todo_list = {format_todo_list(todo_list)}")

        plan = self._search_engine().seek_plan(state.copy(state.name), todo_list)

        if self.is_verbose(1):
            logger.info(f"FP> result = {format_todo_list(plan) if plan is not None else None}")
        return plan

    def run_lazy_lookahead(self, state, todo_list, max_tries=config.DEFAULT_MAX_TRIES):
        return run_lazy_lookahead(self, state, todo_list, max_tries)

    def pyhop(self, state, todo_list):
        """Pyhop-style alias of find_plan, kept for old callers."""
        _deprecation_notice(self._verbose_level)
        return self.find_plan(state, todo_list)

    def __repr__(self):
        return (f"<HTNPlanner domain={self._domain.name} strategy={self._strategy.value} "
                f"verbose={self._verbose_level} verify_goals={self._verify_goals}>")


Planner = HTNPlanner


class PlannerBuilder:
    """Collects planner options step by step; build() validates and creates the planner."""

    def __init__(self):
        self._domain = None
        self._strategy = PlanningStrategy.coerce(config.DEFAULT_STRATEGY)
        self._verbose_level = config.DEFAULT_VERBOSE_LEVEL
        self._verify_goals = config.DEFAULT_VERIFY_GOALS
        self._multigoals = {}

    def with_domain(self, domain):
        self._domain = domain
        return self

    def with_strategy(self, strategy):
        self._strategy = PlanningStrategy.coerce(strategy)
        return self

    def with_verbose_level(self, level):
        self._verbose_level = _check_verbose_level(level)
        return self

    def with_goal_verification(self, verify):
        self._verify_goals = bool(verify)
        return self

    def with_multigoal(self, goal):
        if not isinstance(goal, Multigoal):
            raise Generic(f"with_multigoal needs a Multigoal, got {goal!r}")
        self._multigoals[f"goal_{goal.name}"] = goal.copy(goal.name)
        return self

    def with_multigoals(self, goals):
        for goal in goals:
            self.with_multigoal(goal)
        return self

    def build(self):
        if self._domain is None:
            raise InvalidDomainConfiguration("a domain is required to build a planner")
        return HTNPlanner(self._domain, self._strategy, self._verbose_level,
                          self._verify_goals, self._multigoals)


def _deprecation_notice(verbose_level):
    if verbose_level > 0:
        logger.info("")
        logger.info("        >> The function 'pyhop' exists to provide backward compatibility")
        logger.info("        >> with Pyhop. In the future, please use find_plan instead.")
    warnings.warn("pyhop() is deprecated; use find_plan() instead", DeprecationWarning, stacklevel=3)


def pyhop(domain, state, todo_list, verbose_level=config.DEFAULT_VERBOSE_LEVEL):
    """Legacy entry point: plan with a default-configured planner for domain."""
    planner = PlannerBuilder().with_domain(domain).with_verbose_level(verbose_level).build()
    _deprecation_notice(planner.verbose_level)
    return planner.find_plan(state, todo_list)
