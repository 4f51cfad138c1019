"""Testing generators – Hypothesis property-based testing strategies.

Requires the ``hypothesis`` package:

    pip install hypothesis
    # or
    pip install "admin-access[test]"
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from hypothesis.strategies import SearchStrategy  # type: ignore[import-untyped]

    from admin_access.access import Role


def _require_hypothesis() -> Any:
    """Lazy import guard – raises a clear error when hypothesis is absent."""
    try:
        import hypothesis.strategies as st  # type: ignore[import-untyped]
        return st
    except ImportError as exc:
        raise ImportError(
            "Install 'hypothesis' to use property-based testing strategies: "
            "pip install hypothesis"
        ) from exc


_SEGMENT = r"[a-z][a-z0-9_]{0,11}"


def permission_id_strategy(domains: list[str] | None = None) -> "SearchStrategy[str]":
    """Strategy producing ``<domain>.<verb>`` permission ids.

    Args:
        domains: Restrict the domain part to these values (e.g. ``["jobs"]``).

    Example::

        @given(permission_id_strategy())
        def test_unknown_role_denies(pid):
            assert not evaluator.has_permission("ghost", pid)
    """
    st = _require_hypothesis()
    segment = st.from_regex(_SEGMENT, fullmatch=True)
    domain = st.sampled_from(domains) if domains else segment
    return st.tuples(domain, segment).map(lambda parts: f"{parts[0]}.{parts[1]}")


def role_id_strategy() -> "SearchStrategy[str]":
    """Strategy producing ``snake_case`` role ids."""
    st = _require_hypothesis()
    return st.from_regex(r"[a-z][a-z0-9]{0,7}(_[a-z0-9]{1,6}){0,2}", fullmatch=True)


def role_strategy(
    *,
    permission_ids: "SearchStrategy[str] | None" = None,
    max_permissions: int = 12,
) -> "SearchStrategy[Role]":
    """Strategy producing :class:`Role` values with random permission sets.

    The permission list may contain duplicates; :class:`Role` collapses them.
    """
    from admin_access.access import Role

    st = _require_hypothesis()
    ids = permission_ids if permission_ids is not None else permission_id_strategy()
    return st.builds(
        Role,
        id=role_id_strategy(),
        name=st.text(min_size=1, max_size=24),
        permissions=st.lists(ids, max_size=max_permissions),
    )


__all__ = ["permission_id_strategy", "role_id_strategy", "role_strategy"]
