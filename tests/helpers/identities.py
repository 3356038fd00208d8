"""Principal identities shared by election tests."""

OWNER = "owner-0x01"
VOTER_1 = "voter-0x02"
VOTER_2 = "voter-0x03"
OUTSIDER = "outsider-0x04"
