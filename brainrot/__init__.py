# BrainRot language package
# This package provides the tokenizer, parser and interpreter for the BrainRot language.
from .errors import BrainrotError, ErrorInfo, ErrorKind
from .interpreter import execute, run_file, Interpreter, ExecutionResult
from .lexer import tokenize
from .parser import parse, parse_program

__all__ = [
    'execute',
    'run_file',
    'Interpreter',
    'ExecutionResult',
    'BrainrotError',
    'ErrorInfo',
    'ErrorKind',
    'tokenize',
    'parse',
    'parse_program',
]
