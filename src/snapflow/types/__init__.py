from snapflow.types.base import SnapflowBaseModel

__all__ = ["SnapflowBaseModel"]
