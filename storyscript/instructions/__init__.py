"""Instruction parsing, validation and dispatch.

Every statement of an instruction string flows through the same pipeline:
parse -> resolve type -> validate params -> handler, so failures surface the
same way whether a script comes from the API or from a direct `process` call.
"""
