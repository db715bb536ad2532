"""Settings, run mode, errors, logging, fixture data and stored session state"""
