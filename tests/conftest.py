import pytest

from tests.factories import MockUpstream, build_service


@pytest.fixture
def upstream() -> MockUpstream:
    return MockUpstream()


@pytest.fixture
async def service(upstream: MockUpstream):
    svc = build_service(upstream)
    yield svc
    await svc.close()
