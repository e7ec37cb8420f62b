from __future__ import annotations


class AiRoleError(Exception):
    pass


class AiRoleNotFoundError(AiRoleError):
    def __init__(self, role_id: str):
        super().__init__(f"AI Role not found: {role_id}")
        self.role_id = role_id


class InvalidAiRoleIdError(AiRoleError):
    def __init__(self, role_id: str):
        super().__init__(f"Invalid Role ID format: {role_id}")
        self.role_id = role_id


class AiRoleRepositoryError(AiRoleError):
    def __init__(self, operation: str, reason: str):
        super().__init__(f"AI Role repository error during {operation}: {reason}")
        self.operation = operation
        self.reason = reason


class StoreConfigurationError(AiRoleRepositoryError):
    def __init__(self, missing: list[str]):
        super().__init__("connect", f"missing settings: {', '.join(missing)}")
        self.missing = missing
