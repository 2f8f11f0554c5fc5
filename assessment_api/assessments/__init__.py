"""
Assessment content module.

Models, transfer objects, repository, services and routers for
assessments, questions, options and passages.
"""
