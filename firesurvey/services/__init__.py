# Services package init
"""
Fire Survey Backend: Services Layer
===================================

What:  Business logic sitting between routes (HTTP) and the database / network.
How:   Services accept sessions and parsed bodies, apply the rules, and raise
       exceptions from firesurvey.exceptions on failure.

Service Inventory:
    - SurveyService: presence check, score classification, constraint-checked insert
    - AlertService: latest reported address
    - ExportService: locating the downloadable database file
    - GenerationService (abstract): prompt → completion backend
    - OllamaService: GenerationService over the Ollama HTTP API
"""
