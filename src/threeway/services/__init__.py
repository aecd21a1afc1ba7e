"""Service layer — benchmark, law checking, and comparison operations.

Every public service method returns a ServiceResult.
"""
