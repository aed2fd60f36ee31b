from .job_posting import fetch_job_description, html_to_text

__all__ = ["fetch_job_description", "html_to_text"]
