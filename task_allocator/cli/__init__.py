"""Command line interface for task_allocator."""
