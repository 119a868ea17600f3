"""Route groups — declare several routes under one prefix and shared middleware.

Usage:
    def user_routes(router: NoreRouter) -> None:
        @router.get("")
        async def list_users(): ...

        router.group("/{user_id}/posts", [require_owner], post_routes)

    app.include_router(group("/users", [authenticate], user_routes))
"""

from typing import Any, Callable, Optional, Sequence

from fastapi import APIRouter, Depends
from fastapi.params import Depends as DependsParam

# A group middleware is either a Depends(...) marker or a plain dependency callable
Middleware = Any


def _as_dependencies(middlewares: Optional[Sequence[Middleware]]) -> list[DependsParam]:
    return [m if isinstance(m, DependsParam) else Depends(m) for m in middlewares or []]


class NoreRouter(APIRouter):
    """APIRouter that can declare nested route groups."""

    def group(
        self,
        prefix: str,
        middlewares: Optional[Sequence[Middleware]],
        routes: Callable[["NoreRouter"], None],
    ) -> "NoreRouter":
        """Declare a nested group and mount it on this router."""
        child = group(prefix, middlewares, routes)
        self.include_router(child)
        return child


def group(
    prefix: str,
    middlewares: Optional[Sequence[Middleware]],
    routes: Callable[[NoreRouter], None],
) -> NoreRouter:
    """Group many routes into a single block.

    Args:
        prefix: Path prefix shared by every route in the group
        middlewares: Dependencies run before every route in the group
        routes: Callback registering the group's routes on the router it receives

    Returns:
        The router, ready for `include_router`
    """
    router = NoreRouter(prefix=prefix, dependencies=_as_dependencies(middlewares))
    routes(router)
    return router
