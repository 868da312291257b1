"""Connection pipeline for remote workspaces.

- **collection**: Lazy async collections (map / filter / flatten / to_map)
- **session**: Session auto-selection and credentialed client factory
- **agent**: Local ssh-agent discovery and startup
- **tunnel**: Tunnel process environment and bearer-token caching
- **identity**: Workspace identity from the environment ARN
- **repos**: Repository / workspace join
"""
