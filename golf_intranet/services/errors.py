"""
services/errors.py

조인 좌석(점유) 처리에서 발생하는 오류 분류.

- CapacityExceeded    : 조인 추가 시 4석 초과 → 어떤 쓰기도 하지 않고 거절
- NotFound            : 코스 타임 / 조인이 이미 삭제됨 → 화면 새로고침 필요
- PartialWriteFailure : 조인 쓰기는 성공했으나 코스 타임 좌석 갱신 실패
                        → 재계산(recompute)으로 복구 필요
- DataStoreError      : 그 외 DB 오류

각 오류는 status_code / details 를 가지며,
golf_intranet.main 의 예외 핸들러가 JSON 응답으로 변환한다.

"""

from typing import Optional


class OccupancyError(Exception):
    status_code = 500

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class CapacityExceeded(OccupancyError):
    status_code = 409

    def __init__(self, *, time_id, join_type, current: int, requested: int, capacity: int):
        self.time_id = time_id
        self.join_type = join_type
        self.current = current
        self.requested = requested
        self.capacity = capacity
        super().__init__(
            f"Course time capacity exceeded ({current} + {requested} > {capacity})",
            details={
                "time_id": str(time_id),
                "join_type": getattr(join_type, "value", join_type),
                "current": current,
                "requested": requested,
                "capacity": capacity,
            },
        )


class NotFound(OccupancyError):
    status_code = 404

    def __init__(self, kind: str, ident):
        self.kind = kind
        self.ident = ident
        super().__init__(
            f"{kind.capitalize()} not found",
            details={"kind": kind, "id": str(ident)},
        )


class DataStoreError(OccupancyError):
    status_code = 503

    def __init__(self, message: str, operation: str):
        self.operation = operation
        super().__init__(message, details={"operation": operation})


class PartialWriteFailure(OccupancyError):
    status_code = 500

    def __init__(self, *, time_id, join_id, cause: Exception):
        self.time_id = time_id
        self.join_id = join_id
        self.cause = cause
        super().__init__(
            "Join saved but course time occupancy was not updated; recompute required",
            details={
                "time_id": str(time_id),
                "join_id": str(join_id),
                "needs_reconciliation": True,
                "cause": getattr(cause, "message", str(cause)),
            },
        )
