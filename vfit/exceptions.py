"""Exceptions raised at the edges of the engine (catalog, hand-offs, sessions)."""


class VFitError(Exception):
    pass


class CatalogError(VFitError):
    pass


class HandOffError(VFitError):
    pass


class SessionNotFound(VFitError):
    pass
