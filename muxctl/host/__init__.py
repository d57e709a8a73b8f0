"""Host-platform helpers used alongside the multiplexer backends.

PUBLIC API:
  - env_commands: shell/PowerShell environment-variable command text
  - file_lock: non-blocking advisory locks on open files
  - terminal: terminal capability probes
  - install: install-method detection (cached per process)
"""
