from .listing import Employee, Listing, Service, StoreHour


__all__ = ["Listing", "Service", "Employee", "StoreHour"]
