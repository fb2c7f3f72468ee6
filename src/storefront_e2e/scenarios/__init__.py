"""End-to-end flows composed from page objects."""

from .cart_flow import CartFlowScenario

__all__ = ["CartFlowScenario"]
