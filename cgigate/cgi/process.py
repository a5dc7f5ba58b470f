#
# This file is part of cgigate released under the MIT license.
# See the NOTICE for more information.

import logging
import os
import signal
import subprocess

from cgigate.cgi.errors import ScriptExecError, ScriptTimeout

log = logging.getLogger("cgigate.error")


def kill_script(proc):
    # scripts run in their own session so forked children die with them
    try:
        os.killpg(proc.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass


def run_script(meta, body=None, timeout=None, merge_stderr=True):
    """Run the script named by ``meta["SCRIPT_NAME"]`` and return its output.

    The script environment is ``meta`` and nothing else. ``body`` is fed to
    the script's standard input. The call blocks until the script exits or,
    when ``timeout`` is set, until that many seconds have passed, in which
    case the script is killed and ``ScriptTimeout`` is raised.
    """
    script = meta["SCRIPT_NAME"]
    stderr = subprocess.STDOUT if merge_stderr else subprocess.DEVNULL
    stdin = subprocess.PIPE if body is not None else subprocess.DEVNULL

    try:
        proc = subprocess.Popen(
            [script],
            stdin=stdin,
            stdout=subprocess.PIPE,
            stderr=stderr,
            env=meta,
            cwd=os.path.dirname(script),
            close_fds=True,
            start_new_session=True,
        )
    except (OSError, ValueError) as e:
        raise ScriptExecError(script, msg=str(e))

    log.debug("Started script %s (pid: %s)", script, proc.pid)

    try:
        output, _ = proc.communicate(body, timeout=timeout)
    except subprocess.TimeoutExpired:
        kill_script(proc)
        # children that left the process group may still hold the pipes
        proc.stdout.close()
        if proc.stdin:
            proc.stdin.close()
        proc.wait()
        raise ScriptTimeout(script, timeout)

    if proc.returncode != 0:
        raise ScriptExecError(script, returncode=proc.returncode,
                              output=output)
    return output
