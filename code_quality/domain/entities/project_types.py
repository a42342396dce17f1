"""Project type tags recognised by detection, rules and structural checks."""

from enum import Enum


class ProjectType(str, Enum):
    """Framework tag. Variant refinements co-exist with their base tag."""

    REACT = "react"
    REACT_NATIVE = "react-native"
    NEXTJS = "nextjs"
    NEXTJS_APP_ROUTER = "nextjs-app-router"
    NESTJS = "nestjs"
    NESTJS_MICROSERVICES = "nestjs-microservices"
    NODEJS = "nodejs"
    VUE = "vue"
    SVELTE = "svelte"
    REMIX = "remix"
    ASTRO = "astro"
    ANGULAR = "angular"
    JAVA = "java"
    DOTNET = "dotnet"
    FIREBASE_FUNCTIONS = "firebase-functions"
    AWS_AMPLIFY = "aws-amplify"


# Order in which the "main" framework is picked from detected tags
MAIN_FRAMEWORK_PRIORITY: tuple[ProjectType, ...] = (
    ProjectType.NEXTJS_APP_ROUTER,
    ProjectType.NEXTJS,
    ProjectType.NESTJS_MICROSERVICES,
    ProjectType.NESTJS,
    ProjectType.REMIX,
    ProjectType.REACT_NATIVE,
    ProjectType.ANGULAR,
    ProjectType.VUE,
    ProjectType.SVELTE,
    ProjectType.ASTRO,
    ProjectType.REACT,
    ProjectType.NODEJS,
    ProjectType.DOTNET,
    ProjectType.JAVA,
    ProjectType.FIREBASE_FUNCTIONS,
    ProjectType.AWS_AMPLIFY,
)
