"""Scenario commands and login orchestration"""
