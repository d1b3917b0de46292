"""Ponto Digital package.

Employees clock in from a mobile page (device fingerprint + geolocation);
administrators manage employees, device bindings, geofences and review the
derived entrada/saída pairs and bank of hours.

Feature modules (geofences, records, timebank, users) share the same seams:
domain model, repository protocol, MySQL repository, service and a thin Flask
controller layer.
"""
