"""Survey Payroll package.

Feature modules (users, attendance, surveys, leave, payroll, ...) each carry a
domain model, a repository protocol with its MySQL implementation, a service
holding the business rules and a thin Flask controller.
"""
