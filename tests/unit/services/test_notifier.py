from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio
import respx

from prhook.core.models import NotificationRequest, RepositorySettings
from prhook.services.notifier import HttpNotifier, build_payload
from prhook.tasks.task_queue import TaskQueue
from tests.helpers import TARGET_REPO

NOTIFY_URL = "https://ci.example.com/hooks/pr"


@pytest.fixture
def request_() -> NotificationRequest:
    return NotificationRequest(repository=TARGET_REPO, branch_name="feature/foo", commit_hash="abc123")


@pytest.fixture
def queue() -> TaskQueue:
    return TaskQueue()


@pytest_asyncio.fixture
async def http_notifier(settings_service, queue):
    notifier = HttpNotifier(settings_service, queue, client=httpx.AsyncClient())
    yield notifier
    await notifier.close()


class TestBuildPayload:
    def test_full_payload(self, request_):
        payload = build_payload(request_, RepositorySettings(notify_url=NOTIFY_URL))

        assert payload == {
            "repository": {"id": 42, "slug": "app", "project": "PROJ"},
            "branch": "feature/foo",
            "commit": "abc123",
        }

    def test_omit_hash_and_branch(self, request_):
        settings = RepositorySettings(notify_url=NOTIFY_URL, omit_hash=True, omit_branch_name=True)

        payload = build_payload(request_, settings)

        assert "branch" not in payload
        assert "commit" not in payload

    def test_missing_hash_is_left_out(self):
        request = NotificationRequest(repository=TARGET_REPO, branch_name="main", commit_hash=None)

        assert "commit" not in build_payload(request, RepositorySettings(notify_url=NOTIFY_URL))


class TestDispatch:
    @pytest.mark.asyncio
    async def test_dispatch_only_enqueues(self, http_notifier, queue, request_):
        with respx.mock(assert_all_called=False) as router:
            route = router.post(NOTIFY_URL)

            await http_notifier.dispatch(request_)

            assert queue.queue.qsize() == 1
            assert not route.called

    @pytest.mark.asyncio
    async def test_full_queue_drops_request(self, settings_service, request_):
        queue = TaskQueue(maxsize=1)
        notifier = HttpNotifier(settings_service, queue)

        await notifier.dispatch(request_)
        await notifier.dispatch(request_)

        assert queue.queue.qsize() == 1

    @pytest.mark.asyncio
    async def test_worker_delivers(self, http_notifier, queue, request_):
        with respx.mock as router:
            route = router.post(NOTIFY_URL).mock(return_value=httpx.Response(200))

            await queue.start_workers(num_workers=1)
            await http_notifier.dispatch(request_)
            await queue.join()
            await queue.stop_workers()

            assert route.call_count == 1


class TestDeliver:
    @pytest.mark.asyncio
    @respx.mock
    async def test_success(self, http_notifier, request_):
        route = respx.post(NOTIFY_URL).mock(return_value=httpx.Response(204))

        assert await http_notifier.deliver(request_) is True
        sent = route.calls.last.request
        assert sent.headers["content-type"] == "application/json"
        assert b'"commit":"abc123"' in sent.content.replace(b" ", b"")

    @pytest.mark.asyncio
    @respx.mock
    async def test_error_status_reported(self, http_notifier, request_):
        respx.post(NOTIFY_URL).mock(return_value=httpx.Response(500, text="boom"))

        assert await http_notifier.deliver(request_) is False

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_error_reported(self, http_notifier, request_):
        respx.post(NOTIFY_URL).mock(side_effect=httpx.ConnectError("refused"))

        assert await http_notifier.deliver(request_) is False

    @pytest.mark.asyncio
    async def test_settings_removed_before_delivery(self, http_notifier, settings_service, request_):
        settings_service.get_settings.return_value = None

        with respx.mock(assert_all_called=False) as router:
            route = router.post(NOTIFY_URL)
            assert await http_notifier.deliver(request_) is False
            assert not route.called


@pytest.mark.asyncio
async def test_close_releases_client(settings_service, queue):
    client = AsyncMock(spec=httpx.AsyncClient)
    notifier = HttpNotifier(settings_service, queue, client=client)

    await notifier.close()

    client.aclose.assert_awaited_once()
