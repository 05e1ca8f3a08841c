"""Domain layer for yardroute application."""

# Services import the database interface, which imports domain entities, so
# they are loaded lazily to keep `import yardroute.domain.entities` cycle-free.
_SERVICES = {
    "CustomerService": "yardroute.domain.customer",
    "PriceBookService": "yardroute.domain.price_book",
    "RecurrenceRuleService": "yardroute.domain.recurrence",
    "RouteGeneratorService": "yardroute.domain.route_generator",
    "BillingService": "yardroute.domain.billing",
    "ReminderService": "yardroute.domain.reminders",
    "VisitService": "yardroute.domain.visit",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
