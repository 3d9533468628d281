"""
Core building blocks: metadata normalization, interval resolution, task
extraction and the vault reader. Analytics engines live in
paralens.core.analytics.
"""
