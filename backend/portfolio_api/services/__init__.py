# Services package init
"""
Portfolio API — Services Layer
================================

What:  Store-access layer sitting between routes (HTTP) and the database.
How:   Services receive an AsyncSession per call, run their queries, and raise
       application exceptions; they never build HTTP responses.

Service Inventory:
    - ArticleService: list, get by id, title-or-content search
    - ProjectService: list, get by id
    - ContactService: validate and insert contact-form submissions
"""
