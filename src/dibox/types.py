from dibox._internal.type_checks import Kind

__all__ = ["Kind"]
