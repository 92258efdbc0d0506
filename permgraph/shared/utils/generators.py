"""Identifier generation: CUID2 for primary keys and generated request ids."""

from cuid2 import cuid_wrapper

_next_cuid = cuid_wrapper()


def generate_cuid() -> str:
    return _next_cuid()
