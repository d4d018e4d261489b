"""Shell template rendering for ``--init`` mode.

The rendered script is meant to be sourced from a shell startup file::

    source <(scriptsort /path/to/dir --init)

It defines an ``includeScripts`` function that sources every script in
the computed order, times each one with an external millisecond helper
and removes itself afterwards. Substitution points are limited to the
fields of ``_INIT_TEMPLATE``; nothing else is interpolated.
"""

import re
import shlex
from pathlib import Path

DEFAULT_TIMER_COMMAND = "ms"

DEFAULT_ELAPSED_VARIABLE = "SCRIPTSORT_ELAPSED"

_DEBUG_START = '    printf "Sourcing \\"${scriptpath}\\"..."\n'
_DEBUG_END = '    printf "done\\n"\n'

_INIT_TEMPLATE = """\
pjoin() {
  local -a parts

  if [[ "${#}" -lt 1 ]]; then
    printf "\\x1b[1;35mpjoin\\x1b[22;39m <path> <part> ...\\n\\n"
    printf "Example:\\n"
    printf "  pjoin \\$HOME .zshrc\\n"
    printf "  \\x1b[3m/Users/${USER}/.zshrc\\x1b[33m\\n"
    return 0
  fi

  for part in "${@}"; do
    parts+=( "${part}" "/" )
  done

  printf "$(realpath $(printf "${parts// /}"))"
}

includeScripts() {
  local -a scripts
  local -a timings
  local directory="${1:-${HOME}/.zsh.scripts}"
  local scriptpath=""
  local timer
  local now
  local elapsed

  scripts=( %(names)s )
  for script in "${scripts[@]}"; do
    timer=%(timer)s
    scriptpath=$(pjoin "${directory}" "${script}")
%(debug_start)s\
    source "${scriptpath}"
    if [ $timer ]; then
      now=%(timer)s
      elapsed=$(($now-$timer))

      timings+=( "${elapsed}ms:${scriptpath}" )
    fi
%(debug_end)s\
  done
}

includeScripts %(directory)s
unset -f includeScripts
"""

_COMMAND_NAME = re.compile(r"[A-Za-z0-9_.+-]+")
_SHELL_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def is_command_name(value: str) -> bool:
    """Check if a value is a bare command name safe to embed unquoted."""
    return _COMMAND_NAME.fullmatch(value) is not None


def is_shell_identifier(value: str) -> bool:
    """Check if a value is a valid shell variable name."""
    return _SHELL_IDENTIFIER.fullmatch(value) is not None


def timer_expression(command: str = DEFAULT_TIMER_COMMAND) -> str:
    """Build the command substitution that reads the millisecond timer.

    Falls back to ``0`` when the helper is not on the caller's PATH.

    Args:
        command: Name of the timer helper.

    Returns:
        Shell command substitution text.
    """
    if not is_command_name(command):
        msg = f"Invalid timer command name: {command!r}"
        raise ValueError(msg)
    return f"$(command 2>&1 >/dev/null -v {command} && {command} || printf '0')"


def render_init_script(
    joined_names: str,
    directory: Path | str,
    *,
    debug: bool = False,
    timer_command: str = DEFAULT_TIMER_COMMAND,
) -> str:
    """Render the sourceable ``includeScripts`` shell script.

    Args:
        joined_names: Space-joined, shell-quoted script names.
        directory: Scripts directory passed to ``includeScripts``.
        debug: Print "Sourcing ..."/"done" around every script.
        timer_command: Name of the millisecond timer helper.

    Returns:
        Complete shell script text.
    """
    return _INIT_TEMPLATE % {
        "names": joined_names,
        "timer": timer_expression(timer_command),
        "debug_start": _DEBUG_START if debug else "\n",
        "debug_end": _DEBUG_END if debug else "",
        "directory": shlex.quote(str(directory)),
    }


def render_bundle_prologue(timer_command: str = DEFAULT_TIMER_COMMAND) -> str:
    """Render the line capturing the start time of a debug bundle."""
    return f"local start_time={timer_expression(timer_command)}\n"


def render_bundle_epilogue(
    timer_command: str = DEFAULT_TIMER_COMMAND,
    elapsed_variable: str = DEFAULT_ELAPSED_VARIABLE,
) -> str:
    """Render the lines capturing the end time and exporting the elapsed time."""
    if not is_shell_identifier(elapsed_variable):
        msg = f"Invalid shell variable name: {elapsed_variable!r}"
        raise ValueError(msg)
    return (
        f"local end_time={timer_expression(timer_command)}\n"
        f"export {elapsed_variable}=$(($end_time - $start_time))\n"
    )
