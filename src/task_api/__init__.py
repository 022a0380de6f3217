"""
FastAPI Task Backend package.

An in-memory task tracking service. The FastAPI application lives in
`task_api.main`; the task rules live in `task_api.repositories`.
"""
