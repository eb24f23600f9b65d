"""
Domain exceptions.

Every error the platform raises on purpose derives from AgentPlatformError,
which carries the HTTP status the API layer should answer with.
"""


class AgentPlatformError(Exception):
    """Base class for expected platform errors."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AgentNotFoundError(AgentPlatformError):
    status_code = 404

    def __init__(self, agent_id: str):
        super().__init__(f"Agent {agent_id} not found")
        self.agent_id = agent_id


class TemplateNotFoundError(AgentPlatformError):
    status_code = 404

    def __init__(self, template_id: str):
        super().__init__(f"Workflow template {template_id} not found")
        self.template_id = template_id


class IntegrationNotFoundError(AgentPlatformError):
    status_code = 404

    def __init__(self, integration_id: str):
        super().__init__(f"Integration {integration_id} not found")
        self.integration_id = integration_id


class StepNotFoundError(AgentPlatformError):
    """A successor id does not resolve inside its template."""

    def __init__(self, step_id: str):
        super().__init__(f"Step {step_id} not found in template")
        self.step_id = step_id


class UnknownStepTypeError(AgentPlatformError):
    """No handler is registered for a step type tag."""

    def __init__(self, step_type: str):
        super().__init__(f"Unknown step type: {step_type}")
        self.step_type = step_type


class TextGenerationError(AgentPlatformError):
    """The text-generation API answered with an error."""

    status_code = 502


class RunCancelledError(AgentPlatformError):
    """A live run was cancelled before it finished."""

    def __init__(self, run_id: str):
        super().__init__("Run cancelled")
        self.run_id = run_id


class IntegrationError(AgentPlatformError):
    """An integration adapter could not complete its external call."""

    status_code = 502


class InvalidRequestError(AgentPlatformError):
    """A request is missing data the operation needs."""

    status_code = 400
