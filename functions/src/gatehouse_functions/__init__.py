"""Lambda entry points for the gatehouse request handlers.

Every function is deployed from the same package; the handler setting picks
which entry point in gatehouse_functions.handlers a function runs.
"""
