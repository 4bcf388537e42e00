"""Routing — template compilation, typed variables, and ordered matching.

Routes are kept in registration order; the first route whose template
matches a request path handles it.
"""
