# Read API for the cached tide data
