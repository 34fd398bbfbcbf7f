"""Prompt classification on top of the holographic encoder."""

from holomem.conversation.classifier import (
    ClassificationResult,
    PromptClassifier,
    QueryType,
)

__all__ = ["PromptClassifier", "QueryType", "ClassificationResult"]
