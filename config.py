# config.py
import os

# Search engine used when a planner is built without an explicit strategy
DEFAULT_STRATEGY = os.environ.get("HTN_STRATEGY", "iterative")

# 0 = silent, 1 = find_plan calls and results, 2 = todo lists per depth, 3 = every step
DEFAULT_VERBOSE_LEVEL = int(os.environ.get("HTN_VERBOSE", "0"))

DEFAULT_VERIFY_GOALS = os.environ.get("HTN_VERIFY_GOALS", "1").lower() not in ("0", "false", "no")

# Outer-loop bound for run_lazy_lookahead
DEFAULT_MAX_TRIES = int(os.environ.get("HTN_MAX_TRIES", "10"))

LOG_FILE = os.environ.get("HTN_LOG_FILE", "planner.log")
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
