"""API routes package for REST endpoints.

- inventory.py: VPC, EC2, EKS, service quota and health endpoints
"""

__all__ = ["inventory"]
