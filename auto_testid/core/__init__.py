"""Core transform: node model, scope tracking and test id generation."""

from auto_testid.core.config import AutoTestIdConfig
from auto_testid.core.transformer import AutoTestIdTransformer, apply_test_ids

__all__ = ["AutoTestIdConfig", "AutoTestIdTransformer", "apply_test_ids"]
