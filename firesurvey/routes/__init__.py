# Routes package init
"""
Fire Survey Backend: API Routes Package
=======================================

Route Inventory:
    - survey.py:  POST    /submitSurvey     (store a survey)
    - alert.py:   GET|POST /fire-alert      (latest reported address)
    - export.py:  GET     /downloadAccess   (database file download)
    - generate.py: POST   /generate         (language model proxy)
    - health.py:  GET     /ping, /health    (liveness, dependency status)

Routes stay thin: parse the request, call one service, shape the response.
Errors are raised as firesurvey.exceptions and formatted in main.py.
"""
