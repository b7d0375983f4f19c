# -*- coding: utf-8 -*-

__title__ = "plog"
__description__ = "Pluggable leveled logging: sync/async loggers over console, file and stream sinks."
__version__ = "0.1.0"
__author__ = "The plog Authors"
__license__ = "MIT"
