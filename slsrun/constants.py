# Service descriptor
DESCRIPTOR_NAME = "serverless.yml"
SUFFIX_PLACEHOLDER = "${opt:suffix}"

# Serverless framework
SLS_EXECUTABLE = "sls"
SLS_ATTEMPTS = 10
SLS_RETRY_DELAY = 5  # seconds

# Runtime directories, in build order
JAVA8_RUNTIME = "java8"
JAVA11_RUNTIME = "java11"
CSHARP_RUNTIME = "csharp"
GOLANG_RUNTIME = "golang"
BUILD_ORDER = (JAVA8_RUNTIME, JAVA11_RUNTIME, CSHARP_RUNTIME, GOLANG_RUNTIME)

# Build commands
MAVEN_PACKAGE = ["mvn", "package"]
DOTNET_RESTORE = ["dotnet", "restore"]
DOTNET_PACKAGE = [
    "dotnet", "lambda", "package",
    "--configuration", "release",
    "--framework", "netcoreapp2.1",
    "--output-package", "./deploy.zip",
]
GO_BUILD = ["go", "build", "-ldflags", "-s", "-ldflags", "-w", "-o", "bin/hello", "main.go"]
GO_BUILD_ENV = {"GOOS": "linux", "GO111MODULE": "on"}

# Maven prefixes advisory diagnostics with this token
ADVISORY_PREFIX = "WARNING"
