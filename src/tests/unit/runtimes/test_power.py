"""Unit tests for PowerManager."""

from unittest.mock import AsyncMock

import httpx
import pytest

from actiongate.infra import ContainerAPI, DockerAPIError
from actiongate.runtimes.docker.conflict import ConflictClassifier
from actiongate.runtimes.docker.power import PowerManager
from actiongate.runtimes.docker.result import PowerAction, PowerStatus


@pytest.fixture
def mock_container_api() -> AsyncMock:
    """Mock ContainerAPI for testing."""
    api = AsyncMock(spec=ContainerAPI)
    for name in ("start", "stop", "restart", "pause", "unpause", "kill"):
        setattr(api, name, AsyncMock())
    return api


class TestPowerManager:
    """Tests for PowerManager."""

    @pytest.fixture
    def manager(self, mock_container_api: AsyncMock) -> PowerManager:
        return PowerManager(mock_container_api, ConflictClassifier([304]))

    @pytest.mark.parametrize("action", list(PowerAction))
    async def test_dispatches_to_matching_call(
        self,
        manager: PowerManager,
        mock_container_api: AsyncMock,
        action: PowerAction,
    ) -> None:
        """Each verb calls exactly its own ContainerAPI method."""
        outcome = await manager.apply("abc", action)

        assert outcome.status == PowerStatus.COMPLETED
        assert outcome.is_modified
        getattr(mock_container_api, action.value).assert_awaited_once_with("abc")
        for other in PowerAction:
            if other is not action:
                getattr(mock_container_api, other.value).assert_not_called()

    async def test_benign_conflict_is_not_modified(
        self, manager: PowerManager, mock_container_api: AsyncMock
    ) -> None:
        mock_container_api.start.side_effect = DockerAPIError(
            304, "container already started", "start"
        )

        outcome = await manager.apply("abc", PowerAction.START)

        assert outcome.status == PowerStatus.NOT_MODIFIED
        assert not outcome.is_modified
        assert outcome.message == "container already started"

    async def test_api_error_is_failure(
        self, manager: PowerManager, mock_container_api: AsyncMock
    ) -> None:
        mock_container_api.kill.side_effect = DockerAPIError(
            404, "No such container: abc", "kill"
        )

        outcome = await manager.apply("abc", PowerAction.KILL)

        assert outcome.status == PowerStatus.FAILED
        assert outcome.is_failure
        assert not outcome.is_modified
        assert outcome.message == "No such container: abc"

    async def test_connection_error_is_failure(
        self, manager: PowerManager, mock_container_api: AsyncMock
    ) -> None:
        mock_container_api.restart.side_effect = httpx.ConnectError(
            "[Errno 2] No such file or directory"
        )

        outcome = await manager.apply("abc", PowerAction.RESTART)

        assert outcome.status == PowerStatus.FAILED
        assert outcome.message == "[Errno 2] No such file or directory"

    async def test_configured_benign_codes(self, mock_container_api: AsyncMock) -> None:
        """Codes other than 304 can be classified as benign."""
        manager = PowerManager(mock_container_api, ConflictClassifier([304, 409]))
        mock_container_api.pause.side_effect = DockerAPIError(
            409, "Container abc is already paused", "pause"
        )

        outcome = await manager.apply("abc", PowerAction.PAUSE)

        assert outcome.status == PowerStatus.NOT_MODIFIED
        assert outcome.message == "Container abc is already paused"

    async def test_operation_codes_apply_to_their_action_only(
        self, mock_container_api: AsyncMock
    ) -> None:
        manager = PowerManager(
            mock_container_api, ConflictClassifier([304], {"pause": [409]})
        )
        mock_container_api.pause.side_effect = DockerAPIError(
            409, "Container abc is already paused", "pause"
        )
        mock_container_api.kill.side_effect = DockerAPIError(
            409, "Container abc is not running", "kill"
        )

        paused = await manager.apply("abc", PowerAction.PAUSE)
        killed = await manager.apply("abc", PowerAction.KILL)

        assert paused.status == PowerStatus.NOT_MODIFIED
        assert killed.status == PowerStatus.FAILED
        assert killed.message == "Container abc is not running"


class TestConflictClassifier:
    """Tests for ConflictClassifier."""

    def test_default_is_304(self) -> None:
        classifier = ConflictClassifier()

        assert classifier.is_benign(304)
        assert classifier.is_benign(304, "kill")
        assert not classifier.is_benign(409)
        assert not classifier.is_benign(409, "pause")
        assert not classifier.is_benign(500)

    def test_none_is_never_benign(self) -> None:
        assert not ConflictClassifier([304], {"pause": [409]}).is_benign(None, "pause")

    def test_custom_codes(self) -> None:
        classifier = ConflictClassifier([409])

        assert classifier.benign_status_codes == frozenset({409})
        assert classifier.is_benign(409)
        assert not classifier.is_benign(304)

    def test_operation_codes(self) -> None:
        classifier = ConflictClassifier([304], {"pause": [409], "unpause": [409]})

        assert classifier.is_benign(409, "pause")
        assert classifier.is_benign(409, "unpause")
        assert not classifier.is_benign(409, "kill")
        assert not classifier.is_benign(409)
        assert not classifier.is_benign(500, "pause")
