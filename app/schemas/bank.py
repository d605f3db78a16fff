from pydantic import BaseModel, ConfigDict, Field


class BankDetails(BaseModel):
    """Bank metadata returned by the IFSC verification API"""
    model_config = ConfigDict(populate_by_name=True)

    bank_name: str = Field(..., alias="bankName")
    bank_branch_name: str = Field(..., alias="bankBranchName")
    address: str
    city_and_pincode: str = Field(..., alias="cityAndPincode")
    country_code: str = Field(..., alias="countryCode")
    network_type: str = Field(..., alias="networkType")
    routing_no: str = Field(..., alias="routingNo")
    state_code: str = Field(..., alias="stateCode")


class BankApiResponse(BaseModel):
    data: BankDetails
