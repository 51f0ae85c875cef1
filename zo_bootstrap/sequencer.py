"""
Bootstrap state machine: validate inputs, compose the environment, launch the
proxy in the background, then replace this process with the server.
"""

import logging
import os
import subprocess
from enum import Enum
from typing import Callable, List, Mapping, Optional, Sequence

from . import config
from . import constants as C
from .composer import EnvironmentComposer
from .errors import BootstrapError, ProcessLaunchError
from .models import BootstrapInputs, EnvironmentSet
from .secret_store import SecretResolver, SecretStore
from .stage_tracking import track_stage
from .validators import validate_required_present

logger = logging.getLogger(__name__)


class BootstrapState(str, Enum):
    """States of a single bootstrap run"""

    START = "START"
    VALIDATING_INPUTS = "VALIDATING_INPUTS"
    COMPOSING_ENVIRONMENT = "COMPOSING_ENVIRONMENT"
    LAUNCHING_PROXY = "LAUNCHING_PROXY"
    LAUNCHING_SERVER = "LAUNCHING_SERVER"
    RUNNING = "RUNNING"
    ABORTED = "ABORTED"


def _spawn_background(command: Sequence[str], env: Mapping[str, str]):
    return subprocess.Popen(list(command), env=dict(env))


def _replace_process(command: Sequence[str], env: Mapping[str, str]):
    os.execvpe(command[0], list(command), dict(env))


def mask_email(email: str) -> str:
    """a@b.com -> a***@b.com"""
    local, sep, domain = email.partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain}"


def log_configuration(inputs: BootstrapInputs, env: EnvironmentSet) -> None:
    """Log the composed configuration without passwords or the DSN."""
    values = env.as_environ()
    logger.info("Configuring OpenObserve:")
    logger.info("  HTTP Port: %s", values[C.ZO_HTTP_PORT])
    logger.info("  gRPC Port: %s", values[C.ZO_GRPC_PORT])
    logger.info("  Root User Email: %s", mask_email(values[C.ZO_ROOT_USER_EMAIL]))
    logger.info("  Storage Type: %s", inputs.storage_type)
    logger.info("  S3 Server URL: %s", values[C.ZO_S3_SERVER_URL])
    logger.info("  S3 Region Name: %s", values[C.ZO_S3_REGION_NAME])
    logger.info("  S3 Bucket Name: %s", values[C.ZO_S3_BUCKET_NAME])
    logger.info("  S3 Provider: %s", values[C.ZO_S3_PROVIDER])
    logger.info("  S3 Feature HTTP1 Only: %s", values[C.ZO_S3_FEATURE_HTTP1_ONLY])
    logger.info("  Meta Store: %s", values[C.ZO_META_STORE])
    logger.info(
        "  Meta Transaction Lock Timeout: %s",
        values[C.ZO_META_TRANSACTION_LOCK_TIMEOUT],
    )
    logger.info(
        "  Meta Transaction Retries: %s", values[C.ZO_META_TRANSACTION_RETRIES]
    )


class BootstrapSequencer:
    """Runs the bootstrap once, from raw environment to server hand-off."""

    def __init__(
        self,
        store: Optional[SecretStore] = None,
        proxy_command: Sequence[str] = tuple(config.PROXY_COMMAND),
        server_command: Sequence[str] = tuple(config.SERVER_COMMAND),
        spawn: Callable = _spawn_background,
        replace: Callable = _replace_process,
        dry_run: bool = False,
    ):
        self.store = store
        self.proxy_command = list(proxy_command)
        self.server_command = list(server_command)
        self.spawn = spawn
        self.replace = replace
        self.dry_run = dry_run
        self.state = BootstrapState.START
        self.history: List[BootstrapState] = [self.state]
        self.environment: Optional[EnvironmentSet] = None
        self.proxy_process = None

    def _transition(self, state: BootstrapState):
        logger.debug("Bootstrap state %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def run(self, environ: Mapping[str, str]) -> int:
        """
        Execute the bootstrap.

        Args:
            environ: Snapshot of the process environment

        Returns:
            Exit code. On success the server replaces this process and nothing
            is returned in production; 0 is only seen when ``replace`` returns
            (tests, dry run).
        """
        try:
            self._transition(BootstrapState.VALIDATING_INPUTS)
            inputs = self._validate(environ)

            self._transition(BootstrapState.COMPOSING_ENVIRONMENT)
            env = self._compose(inputs)
            self.environment = env
            log_configuration(inputs, env)

            if self.dry_run:
                logger.info("Dry run: configuration composed, no processes launched")
                return 0

            child_env = env.child_environ(environ)

            self._transition(BootstrapState.LAUNCHING_PROXY)
            self.proxy_process = self._launch(self.spawn, self.proxy_command, child_env)

            self._transition(BootstrapState.LAUNCHING_SERVER)
            self._launch(self.replace, self.server_command, child_env)
        except BootstrapError as e:
            self._transition(BootstrapState.ABORTED)
            logger.error("Error: %s", e)
            return e.exit_code

        self._transition(BootstrapState.RUNNING)
        return 0

    @track_stage("validate")
    def _validate(self, environ: Mapping[str, str]) -> BootstrapInputs:
        validate_required_present(environ, C.REQUIRED_VARS)
        return BootstrapInputs.from_environ(environ)

    @track_stage("compose")
    def _compose(self, inputs: BootstrapInputs) -> EnvironmentSet:
        resolver = SecretResolver(store=self.store, region=inputs.aws_region)
        return EnvironmentComposer(resolver).compose(inputs)

    def _launch(self, launcher: Callable, command: List[str], env: Mapping[str, str]):
        logger.info("Starting %s", " ".join(command))
        try:
            return launcher(command, env)
        except OSError as e:
            raise ProcessLaunchError(command, e.strerror or str(e)) from e
