"""Core scripting primitives (values, operands, conditional expressions, errors).

Kept free of FastAPI concerns so it can be reused by API routes, the instruction
processor, and tests.
"""
