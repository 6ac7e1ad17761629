"""Test the shared session factory."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from campaign_health.db import session as db_session


@pytest.mark.asyncio
async def test_async_session_bound_to_shared_engine():
    """Sessions come straight from the factory; opening one does not connect."""
    async with db_session.async_session() as s:
        assert isinstance(s, AsyncSession)
        assert s.bind is db_session.engine


def test_factory_is_the_only_session_entry_point():
    public = {name for name in vars(db_session) if not name.startswith("_")}
    assert {"engine", "async_session"} <= public
    assert "get_session" not in public
