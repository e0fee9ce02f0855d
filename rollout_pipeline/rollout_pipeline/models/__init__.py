"""Typed rollout pipeline model."""

from .pipeline import Pipeline, ResourceGroup, Step, Variable

__all__ = ["Pipeline", "ResourceGroup", "Step", "Variable"]
