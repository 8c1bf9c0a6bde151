"""Foundation domain - config, logging, operational errors, shared types.

Import from the subpackages directly (``stackerr.foundation.config``,
``stackerr.foundation.logging``, ...). Nothing is re-exported here so the
core can depend on ``stackerr.foundation.types`` without pulling in the
logging layer, which itself renders core error values.
"""
