import inspect

EXPORT = 'export'
INTERNAL = 'internal'


def export(func):
    func.__access__ = EXPORT
    return func


def view(func):
    # Exported and read only
    func.__access__ = EXPORT
    func.__view__ = True
    return func


def internal(func):
    # Only reachable when the executor bypasses privates
    func.__access__ = INTERNAL
    return func


def access_of(func):
    return getattr(func, '__access__', None)


def is_view(func):
    return getattr(func, '__view__', False)


def methods_of(cls, include_internal=False):
    funcs = []
    for name, member in inspect.getmembers(cls, inspect.isfunction):
        access = access_of(member)
        if access == EXPORT or (include_internal and access == INTERNAL):
            kwargs = [p for p in inspect.signature(member).parameters if p not in ('self', 'caller')]
            funcs.append((name, kwargs))

    return funcs


def takes_caller(func):
    return 'caller' in inspect.signature(func).parameters
