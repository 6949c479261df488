"""
drplr/progress.py

Terminal progress bar for file uploads.

    with open(path, 'rb') as f:
        body = ProgressReader(f, size, out)
        client.drops.create({... 'content': body})
    body.done()

Renders to stderr only when stderr is a TTY and the output is not in
porcelain mode, so scripts consuming the URL never see escape sequences.
"""

import time

from drplr.format import cyan, dim, green

_BAR_WIDTH = 30

# carriage return + erase to end of line
_CLEAR = '\r\033[K'


class ProgressBar:
    """
      uploading  [=============>        ]  62%  6.2M/10.0M  1.4M/s
    """

    def __init__(self, total: int, label: str = '', stream=None, enabled=True):
        self.total = max(total, 1)
        self.label = label
        self.sent = 0
        self.stream = stream
        self._start = time.monotonic()
        self._on = enabled and stream is not None and _isatty(stream)
        self._render()

    def update(self, n: int):
        self.sent = min(self.sent + n, self.total)
        self._render()

    def done(self):
        if not self._on:
            return
        elapsed = time.monotonic() - self._start
        speed = self.total / elapsed if elapsed > 0 else 0
        tick = green('✓', stream=self.stream)
        self.stream.write(f'{_CLEAR}  {tick} {self.label}  {_fmt(self.total)}  '
                          f'({_fmt(speed)}/s  {elapsed:.1f}s)\n')
        self.stream.flush()

    def abort(self):
        """Erase a partly drawn bar so an error message starts on a clean line."""
        if not self._on:
            return
        self.stream.write(_CLEAR)
        self.stream.flush()

    def _render(self):
        if not self._on:
            return
        pct = self.sent / self.total
        filled = int(pct * _BAR_WIDTH)
        arrow = '>' if filled < _BAR_WIDTH else ''
        fill = '=' * filled + arrow
        empty = ' ' * (_BAR_WIDTH - filled - len(arrow))
        bar = dim('[', stream=self.stream) + cyan(fill, stream=self.stream) + empty + dim(']', stream=self.stream)

        elapsed = time.monotonic() - self._start
        speed = self.sent / elapsed if elapsed > 0.1 else 0
        speed_s = f'  {_fmt(speed)}/s' if speed > 0 else ''
        self.stream.write(f'\r  {self.label:<12} {bar} {int(pct * 100):>3}%  '
                          f'{_fmt(self.sent)}/{_fmt(self.total)}{speed_s}')
        self.stream.flush()


class ProgressReader:
    """File wrapper that advances a ProgressBar as requests reads the body."""

    def __init__(self, f, size, out=None, label='uploading'):
        self._f = f
        self._size = size
        enabled = out is not None and not out.porcelain
        self.bar = ProgressBar(size, label=label,
                               stream=out.stderr if out is not None else None,
                               enabled=enabled)

    def read(self, n=-1):
        chunk = self._f.read(n)
        if chunk:
            self.bar.update(len(chunk))
        return chunk

    def __len__(self):
        return self._size

    def done(self):
        self.bar.done()

    def abort(self):
        self.bar.abort()


def _isatty(stream) -> bool:
    return getattr(stream, 'isatty', lambda: False)()


def _fmt(n: float) -> str:
    for unit in ('B', 'K', 'M', 'G', 'T'):
        if n < 1024:
            return f'{n:.1f}{unit}' if unit != 'B' else f'{int(n)}B'
        n /= 1024
    return f'{n:.1f}P'
