from adapters.package_lists.loader import load_package_list

__all__ = [
    "load_package_list",
]
