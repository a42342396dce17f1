"""AWS Amplify: no credentials committed under amplify/."""

from code_quality.domain.entities.quality import Issue
from code_quality.infrastructure.analyzer.structural.base import StructuralContext
from code_quality.infrastructure.rules.patterns import CREDENTIAL_KEYS

AMPLIFY_EXTENSIONS = (".json", ".js", ".ts")


def check_amplify(ctx: StructuralContext) -> list[Issue]:
    issues: list[Issue] = []
    for path in ctx.collector.files_with_extensions(AMPLIFY_EXTENSIONS, under="amplify"):
        if CREDENTIAL_KEYS.search(ctx.collector.read_text(path)):
            issues.append(
                Issue(
                    severity="error",
                    category="security",
                    rule="amplify-no-credentials",
                    message="AWS credentials committed in Amplify configuration",
                    file=path,
                )
            )
    return issues
