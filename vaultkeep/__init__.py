"""
VaultKeep password vault demo

NOTICE:
This is a demo application. Vault items are stored in clear text on this
device, there is no login and no encryption. It provides no real protection
for the data entered into it.
"""
