"""Environment-variable command text for commands run inside a session.

Session creation passes environment bindings straight to the multiplexer;
these helpers are for commands typed into an existing pane, where the
syntax depends on the shell running there (POSIX sh or PowerShell).
"""

import platform
import shlex

POSIX = "posix"
POWERSHELL = "powershell"


def default_shell() -> str:
    """Return the shell family of the host: PowerShell on Windows, POSIX elsewhere."""
    if platform.system() == "Windows":
        return POWERSHELL
    return POSIX


def _powershell_quote(value: str) -> str:
    # Backtick is PowerShell's escape character inside double quotes
    escaped = value.replace("`", "``").replace('"', '`"').replace("$", "`$")
    return f'"{escaped}"'


def set_env_command(key: str, value: str, shell: str | None = None) -> str:
    """Return a command that sets an environment variable.

    Examples:
        >>> set_env_command("FOO", "a b", shell="posix")
        "export FOO='a b'"
        >>> set_env_command("FOO", "bar", shell="powershell")
        '$env:FOO = "bar"'
    """
    if (shell or default_shell()) == POWERSHELL:
        return f"$env:{key} = {_powershell_quote(value)}"
    return f"export {key}={shlex.quote(value)}"


def unset_env_command(key: str, shell: str | None = None) -> str:
    """Return a command that removes an environment variable."""
    if (shell or default_shell()) == POWERSHELL:
        return f"Remove-Item Env:\\{key} -ErrorAction SilentlyContinue"
    return f"unset {key}"


def env_inline_prefix(key: str, value: str, shell: str | None = None) -> str:
    """Return a prefix that sets a variable before another command on one line.

    POSIX: ``export KEY='val' && cmd``; PowerShell: ``$env:KEY = "val"; cmd``.
    """
    if (shell or default_shell()) == POWERSHELL:
        return f"{set_env_command(key, value, POWERSHELL)}; "
    return f"{set_env_command(key, value, POSIX)} && "
