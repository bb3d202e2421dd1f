"""Constants shared across the provisioner."""

HTTP_PREFIX = "http"
MVN_PREFIX = "mvn:"
FILE_SCHEME = "file"
REPOSITORY_SEPARATOR = "!"

REPO1 = "http://repo1.maven.org/maven2/"
DEFAULT_TYPE = "jar"
ARCHIVE_SUFFIX = ".zip"

CONNECT_TIMEOUT = 10.0
DIRECT = "DIRECT"

TEMP_DIR = "temp"
CONF_FOLDER = "conf"
ADDITIONAL_LIB_CONFIG = "provisioning.properties"
ADDITIONAL_LIB_FOLDER = "additionallib"

JAR_KEY = "jar"
ZIP_KEY = "zip"
DESTINATION_KEY = "destination"
