"""Employee administration service.

Feature modules (users, roles, audit, leaves, biodata, payroll, holidays, requests)
each carry a model, a repository protocol with its MySQL implementation, a service
and a thin Flask controller. `container.py` wires them together.
"""
