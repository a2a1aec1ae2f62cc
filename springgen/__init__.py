"""springgen -- scaffold Spring Boot projects from the terminal.

Fetches the Spring Initializr option catalogue, asks for the project
details, downloads the generated archive and unpacks it locally.
"""

__version__ = "0.1.0"
