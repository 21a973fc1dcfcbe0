"""
Tests for the decision-tree core.

Test organization:
- test_node.py: Node structure, levels, execution and cloning
- test_simplify.py: Duplicate-condition and symmetric-condition passes
- test_generation.py: Random tree generation
- test_crossover.py: Cross-breeding of two trees
- test_serialization.py: XML documents
"""
