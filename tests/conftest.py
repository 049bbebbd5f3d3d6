from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from tronvault.db.session import Base
import tronvault.db.models  # noqa: F401 — register all models
from tronvault.infra.blockchain.base import ChainClient
from tronvault.infra.blockchain.tron.address import to_base58, to_hex


@pytest.fixture()
async def engine():
    eng = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest.fixture()
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture()
async def session(session_factory) -> AsyncSession:
    async with session_factory() as sess:
        yield sess


@pytest.fixture()
def chain():
    """ChainClient with mocked I/O and the real address codec."""
    mock = AsyncMock(spec=ChainClient)
    mock.to_base58.side_effect = to_base58
    mock.to_hex.side_effect = to_hex
    return mock
