"""Core domain package for clipscope.

Core contains parsing, ranking, and the history facade without any direct
subprocess or UI code, keeping the business logic portable and testable.
"""
