from docdiff.comparison.comparator import Comparator
from docdiff.comparison.factory import ComparatorFactory
from docdiff.comparison.resolver import resolve_differences

__all__ = ["Comparator", "ComparatorFactory", "resolve_differences"]
