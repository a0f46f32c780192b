"""
Background processing: the scheduler that drains the sync queue.
"""
