"""Bearer-token verification and ownership checks shared by all handlers."""
