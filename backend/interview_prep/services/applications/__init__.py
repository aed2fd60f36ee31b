from .repository import ApplicationRepository, InMemoryApplicationRepository, generate_id

__all__ = ["ApplicationRepository", "InMemoryApplicationRepository", "generate_id"]
