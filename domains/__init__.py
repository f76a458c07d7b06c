"""
Example planning domains.

Each module exposes make_domain() returning a fresh Domain, plus helpers that
build the initial states and goals its scenarios start from.
"""
