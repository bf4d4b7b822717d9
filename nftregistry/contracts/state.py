from nftregistry.db.orm import Variable, Hash


class RegistryState:
    """
    Every record a registry keeps, stored under its contract name. Each field declares the
    value an absent key reads as, so unseen accounts and ids need no initialisation.
    """
    def __init__(self, contract, driver):
        self.contract = contract
        self.driver = driver

        self.name = Variable(contract, 'name', driver=driver, default_value='')
        self.symbol = Variable(contract, 'symbol', driver=driver, default_value='')
        self.counter = Variable(contract, 'counter', driver=driver, t=int, default_value=0)

        self.owners = Hash(contract, 'owners', driver=driver)
        self.balances = Hash(contract, 'balances', driver=driver, default_value=0)
        self.token_approvals = Hash(contract, 'token_approvals', driver=driver)
        self.operator_approvals = Hash(contract, 'operator_approvals', driver=driver, default_value=False)
        self.token_uri = Hash(contract, 'token_uri', driver=driver, default_value='')

        # account, position -> id
        self.owned_index = Hash(contract, 'owned_index', driver=driver)
        self.owned_count = Hash(contract, 'owned_count', driver=driver, default_value=0)
        # id -> position in its owner's list
        self.owned_position = Hash(contract, 'owned_position', driver=driver)
