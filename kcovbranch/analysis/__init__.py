"""Branch classification."""

from kcovbranch.analysis.classifier import BranchClassifier, Classification

__all__ = ["BranchClassifier", "Classification"]
