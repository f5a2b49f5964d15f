"""
Orchestration layer: shared conversion context, exception taxonomy and the
batch pipeline.
"""
