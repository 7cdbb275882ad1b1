"""Classification of runtime error status codes."""

from collections.abc import Iterable, Mapping


class ConflictClassifier:
    """Decides which runtime answers are benign conflicts.

    A benign conflict means the container is already in the requested
    state. Docker reports that as 304 for start/stop but as 409 for a
    repeated pause or unpause, and 409 also covers real failures such as
    killing a stopped container. So codes are benign either for every
    operation or only for the operations they are listed under.
    """

    def __init__(
        self,
        benign_status_codes: Iterable[int] = (304,),
        operation_status_codes: Mapping[str, Iterable[int]] | None = None,
    ) -> None:
        self._benign = frozenset(benign_status_codes)
        self._per_operation = {
            operation: frozenset(codes)
            for operation, codes in (operation_status_codes or {}).items()
        }

    @property
    def benign_status_codes(self) -> frozenset[int]:
        return self._benign

    def is_benign(self, status_code: int | None, operation: str | None = None) -> bool:
        if status_code is None:
            return False
        if status_code in self._benign:
            return True
        return operation is not None and status_code in self._per_operation.get(
            operation, frozenset()
        )
