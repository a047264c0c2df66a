class HarnessError(Exception):
    """
    Base class for errors raised by the harness itself, as opposed to
    reverts coming back from the contracts under test.
    """


class NetworkConfigError(HarnessError):
    pass


class ArtifactError(HarnessError):
    pass


class ArtifactNotFound(ArtifactError):
    def __init__(self, name, searched):
        self.name = name
        self.searched = searched
        super().__init__(f"No artifact named `{name}` in {', '.join(searched) or '(no directories)'}")


class DeploymentError(HarnessError):
    """
    Raised when a deployment step fails. Carries the `label` of the step so the
    deployment can be resumed from the manifest.
    """

    def __init__(self, label, message="An error occurred while deploying"):
        self.label = label
        self.message = message
        super().__init__(self.message)

    def __str__(self):
        return f"{self.message}. Failed step: {self.label}"
