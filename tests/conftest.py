import pytest

# A program indented exactly the way the indentation engine lays it out.
# Tests use it both as a fixture and for the "re-indenting changes nothing" checks.
SAMPLE = """\
; factorial, written as a control-flow graph
(define fact (n)
   (entry start)
   (block start:
    (if (zero? n)
     (return 1)
     (goto loop:)))
   (block loop:
    (let ((acc 1)
          (i n))
     (set! acc (* acc i))
     (jump done:))))

(define main ()
   (print (vector-get v 0)
          (vector-length v)))

(define-registers regs (r0 r1)
   (set-registers ((r0 0))
    (call @print $r0)))
"""


def split_cursor(source: str):
    """Strip the '|' cursor marker from source; return (text, offset)."""
    pos = source.index("|")
    return source[:pos] + source[pos + 1:], pos


@pytest.fixture
def sample_source():
    return SAMPLE
