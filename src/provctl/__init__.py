"""provctl — provision a Tomcat sandbox for an exploded Liferay portal."""

__version__ = "0.1.0"
