"""Service layer — non-raising adapters returning ServiceResult.

Services may import from domain, config, and the assignment core.
"""
