"""
Shell-agnostic prompt segments for Bash, zsh and tmux

``promptseg`` prints small prompt fragments to be spliced into whatever prompt
configuration you already have.  It is invoked once per prompt render and
writes a short string to standard output.

Segments:

- ``left``: a compact Git status (``g`` marker followed by one flag letter per
  interesting condition) and the ``>`` prompt symbol
- ``right``: ``user@host``, but only when logged in over SSH
- ``tmux-right``: the path read from standard input, with ``$HOME`` collapsed
  to ``~`` and shortened to fit a tmux status line
"""

__version__ = "0.3.0"
__author__ = "The promptseg developers"
__license__ = "MIT"
