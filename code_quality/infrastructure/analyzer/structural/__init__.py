"""Structural (convention) checkers, one per framework family.

STRUCTURAL_CHECKERS maps a detected tag to (checker, variant). Tags sharing
a (checker, variant) pair run that checker once.
"""

from code_quality.domain.entities.project_types import ProjectType
from code_quality.infrastructure.analyzer.structural.amplify import check_amplify
from code_quality.infrastructure.analyzer.structural.angular import check_angular
from code_quality.infrastructure.analyzer.structural.base import (
    Expectation,
    StructuralChecker,
    StructuralContext,
    check_expected,
)
from code_quality.infrastructure.analyzer.structural.dotnet import check_dotnet
from code_quality.infrastructure.analyzer.structural.firebase import check_firebase
from code_quality.infrastructure.analyzer.structural.java import check_java
from code_quality.infrastructure.analyzer.structural.multi_project import check_duplicate_dependencies
from code_quality.infrastructure.analyzer.structural.node import check_node
from code_quality.infrastructure.analyzer.structural.react import check_react

STRUCTURAL_CHECKERS: dict[str, tuple[StructuralChecker, str | None]] = {
    ProjectType.REACT.value: (check_react, None),
    ProjectType.REACT_NATIVE.value: (check_react, "react-native"),
    ProjectType.NODEJS.value: (check_node, "nodejs"),
    ProjectType.NEXTJS.value: (check_node, "nextjs"),
    ProjectType.NEXTJS_APP_ROUTER.value: (check_node, "nextjs"),
    ProjectType.NESTJS.value: (check_node, "nestjs"),
    ProjectType.NESTJS_MICROSERVICES.value: (check_node, "nestjs"),
    ProjectType.FIREBASE_FUNCTIONS.value: (check_firebase, None),
    ProjectType.JAVA.value: (check_java, None),
    ProjectType.DOTNET.value: (check_dotnet, None),
    ProjectType.ANGULAR.value: (check_angular, None),
    ProjectType.AWS_AMPLIFY.value: (check_amplify, None),
}

__all__ = [
    "Expectation",
    "STRUCTURAL_CHECKERS",
    "StructuralChecker",
    "StructuralContext",
    "check_duplicate_dependencies",
    "check_expected",
]
