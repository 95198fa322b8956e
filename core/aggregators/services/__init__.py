"""
Aggregator services package.

Contains the content extraction pipeline and shared configuration.
"""
