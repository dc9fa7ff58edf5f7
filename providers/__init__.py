# Upstream data providers
