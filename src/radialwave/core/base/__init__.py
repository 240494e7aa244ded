"""基础组件"""

from .lifecycle_component import ComponentState, LifecycleComponent

__all__ = ["ComponentState", "LifecycleComponent"]
