"""
drplr/output.py

Where every line the CLI prints goes.

One Output is built in main() from the global flags and handed to every
command and to the reconciliation engine. There is no module-level state,
so tests construct their own Output (usually over io.StringIO) and read
back what was written.

  --porcelain   only the result URL on stdout, errors and help on stderr
  --debug       API request/response traces on stderr
"""

import sys

from drplr.format import green, red, yellow


class Output:
    def __init__(self, porcelain=False, debug=False, stdout=None, stderr=None):
        self.porcelain = porcelain
        self.debug_enabled = debug
        self._stdout = stdout
        self._stderr = stderr

    # Resolved lazily so pytest's capsys sees writes made after construction.
    @property
    def stdout(self):
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stderr(self):
        return self._stderr if self._stderr is not None else sys.stderr

    def log(self, *parts):
        """Regular progress/status line. Suppressed in porcelain mode."""
        if not self.porcelain:
            print(*parts, file=self.stdout)

    def error(self, *parts):
        """Always shown, always on stderr."""
        print(*parts, file=self.stderr)

    def debug(self, *parts):
        if self.debug_enabled:
            print('Debug -', *parts, file=self.stderr)

    def output(self, *parts):
        """The command's result (a URL). No trailing newline in porcelain."""
        if self.porcelain:
            self.stdout.write(' '.join(str(p) for p in parts))
            self.stdout.flush()
        else:
            print(*parts, file=self.stdout)

    def info(self, *parts):
        """Help text: stderr in porcelain mode so it never mixes with a URL."""
        print(*parts, file=self.stderr if self.porcelain else self.stdout)

    def ok(self, msg):
        self.log(f'{green("✓", stream=self.stdout)} {msg}')

    def fail(self, msg):
        self.error(f'{red("✗", stream=self.stderr)} {msg}')

    def warn(self, msg):
        self.log(f'{yellow("!", stream=self.stdout)} {msg}')


def quiet():
    """An Output that prints nothing but errors. Default for library calls."""
    return Output(porcelain=True)
