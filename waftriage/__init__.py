"""
WAF Triage - security log triage for web-application firewall events

Summarizes a batch of allow/block decisions into a deterministic report
of noisy hosts, hot rules, sensitive paths and error clusters.
"""

__version__ = "1.0.0"
